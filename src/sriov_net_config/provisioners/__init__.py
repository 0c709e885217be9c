"""SR-IOV provisioners.

This module provides provisioners that apply a resolved configuration to the
host through a DeviceControl: PfProvisioner creates VFs and assigns MACs,
VfProvisioner sets VLANs, binds drivers and renames VF netdevs.
"""

from sriov_net_config.device import DeviceControl
from sriov_net_config.models import ResolvedConfig
from sriov_net_config.provisioners.base import BaseProvisioner
from sriov_net_config.provisioners.pf import PfProvisioner
from sriov_net_config.provisioners.vf import RENAME_POLL_INTERVAL, RENAME_TIMEOUT, VfProvisioner


def provision_all(
    config: ResolvedConfig,
    device: DeviceControl,
    dry_run: bool = False,
) -> None:
    """Provision every PF, then every VF.

    Recreating VFs on a PF invalidates existing VF netdevs, so all PFs are
    finished before any VF is activated or renamed.

    Args:
        config: Resolved configuration for this host
        device: Device control surface to apply changes through
        dry_run: If True, log intended actions without applying them

    Raises:
        NoPFEntriesError: If there are no PF entries
        NoVFEntriesError: If there are no VF entries
    """
    PfProvisioner(device, dry_run=dry_run).provision(config.pf_config)
    VfProvisioner(device, dry_run=dry_run).provision(config.vf_config)


__all__ = [
    "BaseProvisioner",
    "PfProvisioner",
    "RENAME_POLL_INTERVAL",
    "RENAME_TIMEOUT",
    "VfProvisioner",
    "provision_all",
]
