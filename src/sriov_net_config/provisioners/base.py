"""Base provisioner class for SR-IOV device provisioning."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Generic, TypeVar

from sriov_net_config.device import DeviceControl

SpecT = TypeVar("SpecT")


class BaseProvisioner(ABC, Generic[SpecT]):
    """Base class for provisioners.

    Subclasses implement provision_one() for a single spec. In dry-run mode
    a provisioner walks the same steps and logs them, but makes no call that
    changes device state.
    """

    def __init__(self, device: DeviceControl, dry_run: bool = False) -> None:
        """Initialize the provisioner.

        Args:
            device: Device control surface to apply changes through
            dry_run: If True, log intended actions without applying them
        """
        self.device = device
        self.dry_run = dry_run

    @abstractmethod
    def provision(self, config: Mapping[str, SpecT]) -> None:
        """Provision every spec in a configuration map."""
        pass

    @abstractmethod
    def provision_one(self, spec: SpecT) -> None:
        """Provision a single spec."""
        pass
