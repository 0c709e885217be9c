"""Physical Function provisioner."""

import logging
from collections.abc import Mapping

from sriov_net_config.errors import NoPFEntriesError
from sriov_net_config.models import PfSpec
from sriov_net_config.provisioners.base import BaseProvisioner

logger = logging.getLogger(__name__)


class PfProvisioner(BaseProvisioner[PfSpec]):
    """Recreate the VFs of each PF and assign their MAC addresses."""

    def provision(self, config: Mapping[str, PfSpec]) -> None:
        """Provision every PF in the configuration.

        Args:
            config: PF specs keyed by device

        Raises:
            NoPFEntriesError: If there are no PF entries
            MacRangeOverflowError: If a PF's MAC prefix cannot cover its VFs
        """
        if not config:
            raise NoPFEntriesError()

        logger.debug("=== PF Setup ===")
        logger.debug("There are %d PF configuration items", len(config))

        for pf in config.values():
            self.provision_one(pf)

    def provision_one(self, spec: PfSpec) -> None:
        """Reset and recreate the VFs of one PF, then assign MAC addresses.

        The steps run strictly in order: disable autoprobe, delete all VFs,
        create the configured number of VFs, re-enable autoprobe, assign MACs.

        Raises:
            MacRangeOverflowError: If the MAC prefix cannot cover all VFs.
                Raised before the PF is touched.
        """
        dev = spec.device
        macs = spec.vf_mac_addresses()

        logger.info("Disabling SR-IOV autoprobe (auto driver binding) on %s", dev)
        if not self.dry_run:
            self.device.set_autoprobe(dev, False)

        logger.info("Deleting existing Virtual Functions (VFs) on %s", dev)
        if not self.dry_run:
            self.device.set_vf_count(dev, 0)

        logger.info("Creating %d Virtual Functions on %s", spec.vf_count, dev)
        if not self.dry_run:
            self.device.set_vf_count(dev, spec.vf_count)

        logger.info("Re-enabling SR-IOV autoprobe (auto driver binding) on %s", dev)
        if not self.dry_run:
            self.device.set_autoprobe(dev, True)

        for vf_index, mac in enumerate(macs):
            logger.info("Assigning MAC %s to %s VF %d", mac, dev, vf_index)
            if not self.dry_run:
                self.device.assign_vf_mac(dev, vf_index, mac)
