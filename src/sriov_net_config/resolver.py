"""Configuration file resolver.

Splits the declarative configuration file into the global line set (the
``all:`` section) and the line set for the current host (the section named
after it). The file looks like::

    all:
        pf enlan3 32 aa:bb:cc:dd:ee:00
        vf enlan3 0 100 true true iavf  # uplink
    hv01:
        vf enlan3 0 200 true true iavf

Sections for other hosts are ignored.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from sriov_net_config.errors import ConfigNotFoundError

logger = logging.getLogger(__name__)

GLOBAL_SECTION = "all"

SECTION_PATTERN = re.compile(r"^([a-zA-Z0-9_-]+):$")


@dataclass(frozen=True)
class ConfigLine:
    """A content line together with the section it appeared under.

    Attributes:
        text: Line content with surrounding whitespace stripped
        section: Section name ("all" or a host name)
        lineno: 1-based line number in the source file
    """

    text: str
    section: str
    lineno: int | None = None


class ConfigResolver:
    """Reader for sectioned SR-IOV configuration files."""

    def __init__(self, path: str | Path, host: str) -> None:
        """Initialize the resolver.

        Args:
            path: Path to the configuration file
            host: Host identity whose section should be collected
        """
        self.path = Path(path)
        self.host = host

    def resolve(self) -> tuple[list[ConfigLine], list[ConfigLine]]:
        """Read the file and split it into global and host-specific lines.

        Returns:
            Tuple of (global_lines, host_lines), each in file order

        Raises:
            ConfigNotFoundError: If the file cannot be opened or read
        """
        content = self._read()

        global_lines: list[ConfigLine] = []
        host_lines: list[ConfigLine] = []
        current_section = ""

        for lineno, raw in enumerate(content.splitlines(), start=1):
            line = raw.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            match = SECTION_PATTERN.match(line)
            if match:
                current_section = match.group(1)
                continue

            if current_section == GLOBAL_SECTION:
                global_lines.append(ConfigLine(line, current_section, lineno))
            elif current_section == self.host:
                host_lines.append(ConfigLine(line, current_section, lineno))

        logger.debug(
            "Read %d global and %d host-specific line(s) for host %s from %s",
            len(global_lines),
            len(host_lines),
            self.host,
            self.path,
        )
        return global_lines, host_lines

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigNotFoundError(str(self.path), str(e)) from e


def resolve(path: str | Path, host: str) -> tuple[list[ConfigLine], list[ConfigLine]]:
    """Split a configuration file into global and host-specific lines.

    This is a convenience function that creates a ConfigResolver and calls resolve().

    Args:
        path: Path to the configuration file
        host: Host identity whose section should be collected

    Returns:
        Tuple of (global_lines, host_lines), each in file order

    Raises:
        ConfigNotFoundError: If the file cannot be opened or read
    """
    return ConfigResolver(path, host).resolve()
