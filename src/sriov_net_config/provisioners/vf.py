"""Virtual Function provisioner."""

import logging
from collections.abc import Mapping

from sriov_net_config.device import DeviceControl
from sriov_net_config.errors import NoVFEntriesError, RenameTimeoutError
from sriov_net_config.models import VfSpec
from sriov_net_config.provisioners.base import BaseProvisioner

logger = logging.getLogger(__name__)

RENAME_TIMEOUT = 10
RENAME_POLL_INTERVAL = 1


class VfProvisioner(BaseProvisioner[VfSpec]):
    """Apply VLAN, driver binding and renaming to VFs."""

    def __init__(
        self,
        device: DeviceControl,
        dry_run: bool = False,
        rename_timeout: float = RENAME_TIMEOUT,
        poll_interval: float = RENAME_POLL_INTERVAL,
    ) -> None:
        """Initialize the VF provisioner.

        Args:
            device: Device control surface to apply changes through
            dry_run: If True, log intended actions without applying them
            rename_timeout: Seconds to wait for a VF netdev before renaming
            poll_interval: Seconds between checks while waiting
        """
        super().__init__(device, dry_run)
        self.rename_timeout = rename_timeout
        self.poll_interval = poll_interval

    def provision(self, config: Mapping[str, VfSpec]) -> None:
        """Provision every VF in the configuration.

        Args:
            config: VF specs keyed by label

        Raises:
            NoVFEntriesError: If there are no VF entries
        """
        if not config:
            raise NoVFEntriesError()

        logger.debug("=== VF Setup ===")
        logger.debug("Found %d VF configuration item(s)", len(config))

        for vf in config.values():
            self.provision_one(vf)

    def provision_one(self, spec: VfSpec) -> None:
        """Apply the configuration of a single VF.

        Sets the VLAN, then binds the driver if ``activate`` is set, then
        renames the VF netdev to its label if ``rename`` is set. Renaming
        needs the netdev that binding creates, so the order is fixed.

        Raises:
            PciSlotNotFoundError: If the VF's PCI slot cannot be resolved
            RenameTimeoutError: If the VF netdev does not appear in time
        """
        label = spec.label

        logger.info("Setting %s to VLAN %d", label, spec.vlan)
        if not self.dry_run:
            self.device.set_vf_vlan(spec.device, spec.vf_index, spec.vlan)

        if spec.activate:
            self._activate(spec)

        if spec.rename:
            logger.info("Renaming %s", label)
            if not self.dry_run:
                self._rename(spec)

    def _activate(self, spec: VfSpec) -> None:
        label = spec.label
        slot = self.device.get_pci_identity(spec.device, spec.vf_index)

        logger.info("Activating VF %s (PCI %s) with driver %s", label, slot, spec.driver)

        if self.dry_run:
            logger.debug("Dry-run mode: Skipping unbind for VF %s (PCI %s)", label, slot)
            return

        current_driver = self.device.get_bound_driver(slot)
        if current_driver is not None:
            self.device.unbind(current_driver, slot)
            logger.debug("Unbound VF %s (PCI %s) from driver %s", label, slot, current_driver)
        else:
            logger.debug("No driver bound for VF %s (PCI %s)", label, slot)

        self.device.bind(spec.driver, slot)

    def _rename(self, spec: VfSpec) -> None:
        label = spec.label
        current_name = self.device.wait_for_enumerated_device(
            spec.device,
            spec.vf_index,
            timeout=self.rename_timeout,
            interval=self.poll_interval,
        )

        if current_name is None:
            raise RenameTimeoutError(spec.device, spec.vf_index, self.rename_timeout)

        if current_name == label:
            logger.debug("VF netdev already named %s", label)
            return

        logger.info(
            "Renaming PF device %s VF %d (%s) to %s",
            spec.device,
            spec.vf_index,
            current_name,
            label,
        )
        self.device.rename_device(current_name, label)
