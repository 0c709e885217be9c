"""SR-IOV network VF provisioning for virtualization hosts."""

from sriov_net_config.device import DeviceControl, SysfsDeviceControl
from sriov_net_config.parser import ConfigLineParser, parse_config, parse_lines
from sriov_net_config.provisioners import PfProvisioner, VfProvisioner, provision_all
from sriov_net_config.resolver import ConfigLine, ConfigResolver, resolve

__version__ = "0.1.0"

__all__ = [
    "ConfigLine",
    "ConfigLineParser",
    "ConfigResolver",
    "DeviceControl",
    "PfProvisioner",
    "SysfsDeviceControl",
    "VfProvisioner",
    "parse_config",
    "parse_lines",
    "provision_all",
    "resolve",
    "__version__",
]
