"""Device control surface for SR-IOV provisioning.

Provisioners never touch the system directly; they call a DeviceControl.
SysfsDeviceControl is the real implementation: it writes sysfs control files
for VF counts, autoprobe and driver binding, and runs ``ip link`` for MAC
addresses, VLANs and renames.

IMPORTANT: Writing sriov_numvfs deletes every existing VF on the PF before
creating new ones. Nothing here checks whether those VFs are in use.
"""

import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from sriov_net_config.errors import DeviceControlError, PciSlotNotFoundError
from sriov_net_config.polling import poll_until

logger = logging.getLogger(__name__)


class DeviceControl(ABC):
    """Operations the provisioners need from the host.

    All operations are synchronous and take effect immediately.
    """

    @abstractmethod
    def set_autoprobe(self, device: str, enabled: bool) -> None:
        """Enable or disable automatic driver binding for new VFs of a PF."""
        pass

    @abstractmethod
    def set_vf_count(self, device: str, count: int) -> None:
        """Set the number of VFs on a PF (0 deletes all VFs)."""
        pass

    @abstractmethod
    def assign_vf_mac(self, device: str, vf_index: int, mac: str) -> None:
        """Assign a MAC address to a VF."""
        pass

    @abstractmethod
    def set_vf_vlan(self, device: str, vf_index: int, vlan: int) -> None:
        """Set the port VLAN of a VF."""
        pass

    @abstractmethod
    def get_pci_identity(self, device: str, vf_index: int | None = None) -> str:
        """Return the PCI slot name of a PF, or of one of its VFs.

        Raises:
            PciSlotNotFoundError: If the slot name cannot be resolved
        """
        pass

    @abstractmethod
    def get_bound_driver(self, slot: str) -> str | None:
        """Return the name of the driver bound to a PCI slot, if any."""
        pass

    @abstractmethod
    def unbind(self, driver: str, slot: str) -> None:
        """Unbind a PCI slot from a driver."""
        pass

    @abstractmethod
    def bind(self, driver: str, slot: str) -> None:
        """Bind a PCI slot to a driver."""
        pass

    @abstractmethod
    def rename_device(self, old_name: str, new_name: str) -> None:
        """Rename a network device."""
        pass

    @abstractmethod
    def wait_for_enumerated_device(
        self,
        device: str,
        vf_index: int,
        timeout: float,
        interval: float = 1.0,
    ) -> str | None:
        """Wait for the network device of a VF to appear.

        Returns:
            The current network device name, or None on timeout
        """
        pass


class SysfsDeviceControl(DeviceControl):
    """DeviceControl backed by sysfs and iproute2.

    Attributes:
        sysfs_root: Mount point of sysfs (a fake tree can be used for testing)
        ip_path: Path or name of the ip executable
        shutdown: Event that aborts pending waits when set
    """

    DEFAULT_SYSFS_ROOT = "/sys"
    DEFAULT_IP_PATH = "ip"
    IP_TIMEOUT = 30

    def __init__(
        self,
        sysfs_root: str | None = None,
        ip_path: str | None = None,
        shutdown: threading.Event | None = None,
    ) -> None:
        """Initialize the device control.

        Args:
            sysfs_root: Root of the sysfs tree. If None, uses /sys.
            ip_path: ip executable. If None, uses "ip" from PATH.
            shutdown: Optional event that cancels waits when set
        """
        self.sysfs_root = Path(sysfs_root or self.DEFAULT_SYSFS_ROOT)
        self.ip_path = ip_path or self.DEFAULT_IP_PATH
        self.shutdown = shutdown

    def _net_device_dir(self, device: str, vf_index: int | None = None) -> Path:
        path = self.sysfs_root / "class" / "net" / device / "device"
        if vf_index is not None:
            path = path / f"virtfn{vf_index}"
        return path

    def _write(self, path: Path, value: str) -> None:
        """Write a value to a sysfs control file.

        Raises:
            DeviceControlError: If the write fails.
        """
        logger.debug("Writing '%s' to %s", value, path)
        try:
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise DeviceControlError(f"Failed to write '{value}' to {path}: {e}") from e

    def _run_ip(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run the ip command with the given arguments.

        Raises:
            DeviceControlError: If the command cannot be run or fails.
        """
        cmd = [self.ip_path, *args]
        logger.debug("Running command: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.IP_TIMEOUT,
            )
        except FileNotFoundError:
            raise DeviceControlError(
                f"ip command not found at {self.ip_path}. Is iproute2 installed?"
            ) from None
        except subprocess.TimeoutExpired as e:
            raise DeviceControlError(
                f"ip command timed out after {self.IP_TIMEOUT} seconds: {' '.join(args)}"
            ) from e
        except OSError as e:
            raise DeviceControlError(f"Failed to execute ip command: {e}") from e

        if result.returncode != 0:
            error_msg = result.stderr.strip() or result.stdout.strip() or "Unknown error"
            raise DeviceControlError(
                f"ip command failed: {' '.join(args)}\n"
                f"Exit code: {result.returncode}\n"
                f"Error: {error_msg}"
            )

        return result

    def set_autoprobe(self, device: str, enabled: bool) -> None:
        self._write(self._net_device_dir(device) / "sriov_drivers_autoprobe", str(int(enabled)))

    def set_vf_count(self, device: str, count: int) -> None:
        self._write(self._net_device_dir(device) / "sriov_numvfs", str(count))

    def assign_vf_mac(self, device: str, vf_index: int, mac: str) -> None:
        self._run_ip("link", "set", device, "vf", str(vf_index), "mac", mac)

    def set_vf_vlan(self, device: str, vf_index: int, vlan: int) -> None:
        self._run_ip("link", "set", "dev", device, "vf", str(vf_index), "vlan", str(vlan))

    def get_pci_identity(self, device: str, vf_index: int | None = None) -> str:
        """Read PCI_SLOT_NAME from the uevent file of a PF or VF.

        Raises:
            PciSlotNotFoundError: If the uevent file or the key is missing
        """
        uevent_path = self._net_device_dir(device, vf_index) / "uevent"

        try:
            content = uevent_path.read_text(encoding="utf-8")
        except OSError:
            raise PciSlotNotFoundError(
                device, vf_index, f"uevent file not found at {uevent_path}"
            ) from None

        for line in content.splitlines():
            key, _, value = line.partition("=")
            if key == "PCI_SLOT_NAME" and value.strip():
                return value.strip()

        raise PciSlotNotFoundError(device, vf_index, f"PCI_SLOT_NAME not found in {uevent_path}")

    def get_bound_driver(self, slot: str) -> str | None:
        driver_link = self.sysfs_root / "bus" / "pci" / "devices" / slot / "driver"
        if not driver_link.exists():
            return None
        return driver_link.resolve().name

    def unbind(self, driver: str, slot: str) -> None:
        self._write(self.sysfs_root / "bus" / "pci" / "drivers" / driver / "unbind", slot)

    def bind(self, driver: str, slot: str) -> None:
        self._write(self.sysfs_root / "bus" / "pci" / "drivers" / driver / "bind", slot)

    def rename_device(self, old_name: str, new_name: str) -> None:
        self._run_ip("link", "set", "dev", old_name, "name", new_name)

    def find_enumerated_device(self, device: str, vf_index: int) -> str | None:
        """Return the VF's network device name if exactly one is enumerated."""
        net_dir = self._net_device_dir(device, vf_index) / "net"
        try:
            entries = sorted(entry.name for entry in net_dir.iterdir())
        except OSError:
            return None

        if len(entries) != 1:
            return None
        return entries[0]

    def wait_for_enumerated_device(
        self,
        device: str,
        vf_index: int,
        timeout: float,
        interval: float = 1.0,
    ) -> str | None:
        return poll_until(
            lambda: self.find_enumerated_device(device, vf_index),
            timeout=timeout,
            interval=interval,
            cancel=self.shutdown,
        )
