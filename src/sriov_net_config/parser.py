"""Configuration line parser.

Turns resolved configuration lines into validated PF and VF specs. Global
lines are parsed before host lines and each spec is stored under its key, so
a later line with the same key replaces the earlier one as a whole.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from sriov_net_config.errors import InvalidConfigLineError
from sriov_net_config.models import PfSpec, ResolvedConfig, VfSpec
from sriov_net_config.resolver import ConfigLine, resolve

logger = logging.getLogger(__name__)

PF_FIELDS = ("device", "vf_count", "mac_prefix")
VF_FIELDS = ("device", "vf_index", "vlan", "activate", "rename", "driver")


class ConfigLineParser:
    """Parser for ``pf`` and ``vf`` configuration lines.

    Parsing is fail-fast: the first malformed line raises and no
    configuration is returned.
    """

    def __init__(self) -> None:
        """Initialize an empty parser."""
        self.pf_config: dict[str, PfSpec] = {}
        self.vf_config: dict[str, VfSpec] = {}

    def parse(
        self,
        global_lines: list[ConfigLine],
        host_lines: list[ConfigLine],
        host: str | None = None,
    ) -> ResolvedConfig:
        """Parse global lines, then host lines, into a ResolvedConfig.

        Args:
            global_lines: Lines from the "all" section, in file order
            host_lines: Lines from the host's section, in file order
            host: Host identity the lines were resolved for

        Returns:
            ResolvedConfig: Effective PF and VF configuration

        Raises:
            InvalidConfigLineError: On the first line that fails validation
        """
        self.pf_config = {}
        self.vf_config = {}

        for line in global_lines:
            self.parse_line(line)

        for line in host_lines:
            self.parse_line(line)

        return ResolvedConfig(host=host, pf_config=self.pf_config, vf_config=self.vf_config)

    def parse_line(self, line: ConfigLine) -> None:
        """Parse one line and store the resulting spec.

        Raises:
            InvalidConfigLineError: If the line is not a well-formed pf or vf line
        """
        tokens = line.text.split()
        kind = tokens[0] if tokens else ""

        if kind == "vf" and len(tokens) >= len(VF_FIELDS) + 1:
            vf = self._build(VfSpec, VF_FIELDS, tokens, line)
            self.vf_config[vf.label] = vf
            logger.debug("[%s] VF %s => %s", line.section, vf.label, line.text)

        elif kind == "pf" and len(tokens) >= len(PF_FIELDS) + 1:
            pf = self._build(PfSpec, PF_FIELDS, tokens, line)
            self.pf_config[pf.device] = pf
            logger.debug("[%s] PF %s => %s", line.section, pf.device, line.text)

        else:
            raise InvalidConfigLineError(
                line.text,
                "line",
                "expected 'pf <dev> <num_vfs> <mac_prefix>' or "
                "'vf <dev> <vf_idx> <vlan> <activate> <rename> <driver>'",
                lineno=line.lineno,
            )

    def _build(
        self,
        model_class: type[PfSpec] | type[VfSpec],
        fields: tuple[str, ...],
        tokens: list[str],
        line: ConfigLine,
    ) -> PfSpec | VfSpec:
        values: dict[str, str | None] = dict(zip(fields, tokens[1:], strict=False))
        # Everything after the fixed fields is the comment
        values["comment"] = " ".join(tokens[len(fields) + 1 :]) or None

        try:
            return model_class.model_validate(values)
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "line"
            raise InvalidConfigLineError(
                line.text,
                field,
                error["msg"],
                lineno=line.lineno,
            ) from e


def parse_lines(
    global_lines: list[ConfigLine],
    host_lines: list[ConfigLine],
    host: str | None = None,
) -> ResolvedConfig:
    """Parse resolved lines into a ResolvedConfig.

    This is a convenience function that creates a ConfigLineParser and calls parse().

    Raises:
        InvalidConfigLineError: On the first line that fails validation
    """
    return ConfigLineParser().parse(global_lines, host_lines, host=host)


def parse_config(path: str | Path, host: str) -> ResolvedConfig:
    """Read a configuration file and resolve it for a host.

    Args:
        path: Path to the configuration file
        host: Host identity whose section overrides the "all" section

    Returns:
        ResolvedConfig: Effective PF and VF configuration for the host

    Raises:
        ConfigNotFoundError: If the file cannot be opened or read
        InvalidConfigLineError: On the first line that fails validation
    """
    global_lines, host_lines = resolve(path, host)
    return parse_lines(global_lines, host_lines, host=host)
