"""Entry point for SR-IOV network configuration.

This module is invoked at boot (or by an operator) to create and configure
the SR-IOV virtual functions of this host.

Usage:
    python -m sriov_net_config [--config FILE] [--host NAME] [--vf DEV INDEX]
                               [--dry-run] [--config-report] [--verbose]

All arguments are optional. Without --vf every PF and then every VF in the
configuration is provisioned.
"""

import argparse
import logging
import signal
import socket
import sys
import threading
from types import FrameType

from sriov_net_config import __version__
from sriov_net_config.device import DeviceControl, SysfsDeviceControl
from sriov_net_config.errors import ConfigError, ProvisioningError
from sriov_net_config.models import ResolvedConfig
from sriov_net_config.parser import parse_config
from sriov_net_config.provisioners import VfProvisioner, provision_all
from sriov_net_config.report import build_report
from sriov_net_config.validators import is_integer, is_word

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/sriov-net/sriov-net.config"

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_PROVISION_ERROR = 2
EXIT_INTERRUPTED = 130


def setup_logging(verbose: bool = False, timestamps: bool = False) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, use DEBUG level. Otherwise, use INFO.
        timestamps: If True, prefix every record with date and time.
    """
    level = logging.DEBUG if verbose else logging.INFO
    log_format = "[%(levelname)s] %(name)s: %(message)s"
    if timestamps:
        log_format = "%(asctime)s " + log_format
    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def default_host_name() -> str:
    """Return the short host name (like ``hostname -s``)."""
    return socket.gethostname().split(".", 1)[0]


def log_resolved_config(config: ResolvedConfig) -> None:
    """Log every resolved entry at DEBUG level."""
    logger.debug("=== VF Config ===")
    for key, vf in config.vf_config.items():
        logger.debug("%s => %s", key, vf.model_dump())

    logger.debug("=== PF Config ===")
    for key, pf in config.pf_config.items():
        logger.debug("%s => %s", key, pf.model_dump())


def apply_configuration(
    config_path: str,
    host: str,
    dry_run: bool = False,
    specific_vf: tuple[str, int] | None = None,
    config_report: bool = False,
    device: DeviceControl | None = None,
) -> int:
    """Resolve the configuration for a host and apply it.

    Any error stops the run immediately. Changes already made are left in
    place; re-running after fixing the cause converges to the configured state.

    Args:
        config_path: Path to the configuration file.
        host: Host identity whose section overrides the "all" section.
        dry_run: If True, log every action but change nothing.
        specific_vf: (device, vf_index) to provision a single VF only.
        config_report: If True, print the resolved configuration and stop.
        device: Device control surface (default: SysfsDeviceControl).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        logger.info("Reading configuration from %s for host %s", config_path, host)
        config = parse_config(config_path, host)
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR

    log_resolved_config(config)

    if config_report:
        for line in build_report(config):
            print(line)
        return EXIT_SUCCESS

    if device is None:
        device = SysfsDeviceControl()

    if dry_run:
        logger.info("Dry run - no changes will be made")

    logger.info("Starting SR-IOV configuration")

    try:
        if specific_vf is None:
            provision_all(config, device, dry_run=dry_run)
        else:
            vf = config.get_vf(*specific_vf)
            logger.debug("VF %s found in the configuration, processing it", vf.label)
            VfProvisioner(device, dry_run=dry_run).provision_one(vf)
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR
    except ProvisioningError as e:
        logger.error("%s", e)
        return EXIT_PROVISION_ERROR

    logger.info("All done! SR-IOV configuration completed successfully")
    return EXIT_SUCCESS


def main() -> int:
    """Main entry point for SR-IOV network configuration.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Create and configure SR-IOV virtual functions",
        prog="sriov-net-config",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Override the hostname used to select host-specific entries",
    )
    parser.add_argument(
        "--vf",
        nargs=2,
        metavar=("DEV", "INDEX"),
        default=None,
        help="Configure a single VF only (e.g., --vf enlan3 21)",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Log what would be done without making changes",
    )
    parser.add_argument(
        "--config-report",
        action="store_true",
        help="Show the resolved configuration and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "--log-timestamps",
        action="store_true",
        help="Prefix log messages with a timestamp",
    )
    parser.add_argument(
        "--sysfs-root",
        default=None,
        help="Root of the sysfs tree (for testing)",
    )
    parser.add_argument(
        "--ip-path",
        default=None,
        help="Path to the ip executable (for testing)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args()

    specific_vf: tuple[str, int] | None = None
    if args.vf is not None:
        vf_dev, vf_idx = args.vf
        if not is_word(vf_dev) or not is_integer(vf_idx):
            parser.error(f"--vf requires a device and a VF index, got: {vf_dev} {vf_idx}")
        specific_vf = (vf_dev, int(vf_idx))

    if args.host is not None and not args.host:
        parser.error("--host requires a non-empty host name")

    setup_logging(verbose=args.verbose, timestamps=args.log_timestamps)

    host = args.host if args.host is not None else default_host_name()

    logger.debug("sriov-net-config %s", __version__)
    logger.debug("Hostname: %s", host)
    logger.debug("Config file: %s", args.config)
    logger.debug("Dry run: %s", args.dry_run)
    logger.debug("Config report: %s", args.config_report)

    # SIGTERM stops the run before the next device step
    shutdown = threading.Event()

    def handle_sigterm(signum: int, frame: FrameType | None) -> None:
        logger.warning("Received signal %d, shutting down", signum)
        shutdown.set()
        raise KeyboardInterrupt

    previous_handler = signal.signal(signal.SIGTERM, handle_sigterm)
    try:
        device = SysfsDeviceControl(
            sysfs_root=args.sysfs_root,
            ip_path=args.ip_path,
            shutdown=shutdown,
        )
        return apply_configuration(
            config_path=args.config,
            host=host,
            dry_run=args.dry_run,
            specific_vf=specific_vf,
            config_report=args.config_report,
            device=device,
        )
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":
    sys.exit(main())
