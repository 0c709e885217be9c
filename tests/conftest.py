"""Pytest configuration and fixtures for sriov-net-config tests."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sriov_net_config.device import DeviceControl
from sriov_net_config.resolver import ConfigLine


@pytest.fixture
def sample_config_text() -> str:
    """Config with global entries, an override host and an unrelated host.

    Returns:
        Configuration file content
    """
    return """# SR-IOV fleet configuration
all:
    pf enlan3 4 aa:bb:cc:dd:ee:00   # 25G uplink
    vf enlan3 0 100 true true iavf  # management
    vf enlan3 1 200 true false vfio-pci

hv01:
    vf enlan3 1 300 false false iavf  # hv01 override
    pf enlan4 2 aa:bb:cc:dd:ff:10

hv02:
    pf enlan3 8 02:00:00:00:00:00
"""


@pytest.fixture
def config_file(tmp_path: Path, sample_config_text: str) -> Path:
    """Write the sample configuration to a temporary file.

    Returns:
        Path to the configuration file
    """
    path = tmp_path / "sriov-net.config"
    path.write_text(sample_config_text)
    return path


@pytest.fixture
def make_lines() -> Callable[..., list[ConfigLine]]:
    """Factory building ConfigLine lists from raw strings.

    Usage:
        lines = make_lines("pf enlan3 4 aa:bb:cc:dd:ee:00", section="all")
    """

    def _make(*texts: str, section: str = "all") -> list[ConfigLine]:
        return [ConfigLine(text, section, lineno) for lineno, text in enumerate(texts, start=1)]

    return _make


@pytest.fixture
def device() -> MagicMock:
    """Mock device control surface that records every call.

    get_pci_identity returns a fixed slot, no driver is bound, and the VF
    netdev is enumerated as "eth5" right away.
    """
    mock = MagicMock(spec=DeviceControl)
    mock.get_pci_identity.return_value = "0000:3b:02.1"
    mock.get_bound_driver.return_value = None
    mock.wait_for_enumerated_device.return_value = "eth5"
    return mock


@pytest.fixture
def sysfs_root(tmp_path: Path) -> Path:
    """Fake sysfs tree with PF enlan3 and its VF 0.

    Layout:
        class/net/enlan3/device/{sriov_numvfs,sriov_drivers_autoprobe,uevent}
        class/net/enlan3/device/virtfn0/{uevent,net/}
        bus/pci/devices/0000:3b:02.0/
        bus/pci/drivers/{iavf,vfio-pci}/{bind,unbind}

    Returns:
        Root of the fake sysfs tree
    """
    root = tmp_path / "sys"
    pf_dir = root / "class" / "net" / "enlan3" / "device"
    vf_dir = pf_dir / "virtfn0"
    (vf_dir / "net").mkdir(parents=True)

    (pf_dir / "sriov_numvfs").write_text("0\n")
    (pf_dir / "sriov_drivers_autoprobe").write_text("1\n")
    (pf_dir / "uevent").write_text("DRIVER=ice\nPCI_SLOT_NAME=0000:3b:00.0\n")
    (vf_dir / "uevent").write_text("DRIVER=iavf\nPCI_CLASS=20000\nPCI_SLOT_NAME=0000:3b:02.0\n")

    (root / "bus" / "pci" / "devices" / "0000:3b:02.0").mkdir(parents=True)
    for driver in ("iavf", "vfio-pci"):
        driver_dir = root / "bus" / "pci" / "drivers" / driver
        driver_dir.mkdir(parents=True)
        (driver_dir / "bind").write_text("")
        (driver_dir / "unbind").write_text("")

    return root
