"""Tests for error types."""

from sriov_net_config.errors import (
    ConfigError,
    ConfigNotFoundError,
    DeviceControlError,
    InvalidConfigLineError,
    MacRangeOverflowError,
    NoPFEntriesError,
    NoVFEntriesError,
    OperationCancelledError,
    PciSlotNotFoundError,
    ProvisioningError,
    RenameTimeoutError,
    SriovNetError,
    UnknownVFError,
)


class TestErrorHierarchy:
    """Tests for error families."""

    def test_config_errors(self) -> None:
        """Test configuration problems are ConfigErrors."""
        errors = [
            ConfigNotFoundError("/etc/sriov-net/sriov-net.config"),
            InvalidConfigLineError("pf enlan3", "line", "too few tokens"),
            NoPFEntriesError(),
            NoVFEntriesError(),
            MacRangeOverflowError("enlan3", 1),
            UnknownVFError("enlan3vf99"),
        ]
        for error in errors:
            assert isinstance(error, ConfigError)
            assert isinstance(error, SriovNetError)
            assert not isinstance(error, ProvisioningError)

    def test_provisioning_errors(self) -> None:
        """Test device problems are ProvisioningErrors."""
        errors = [
            PciSlotNotFoundError("enlan3", 1, "no uevent"),
            RenameTimeoutError("enlan3", 1, 10),
            DeviceControlError("write failed"),
            OperationCancelledError("cancelled"),
        ]
        for error in errors:
            assert isinstance(error, ProvisioningError)
            assert isinstance(error, SriovNetError)
            assert not isinstance(error, ConfigError)


class TestErrorMessages:
    """Tests for error message formatting."""

    def test_config_not_found(self) -> None:
        """Test path and optional reason are included."""
        assert str(ConfigNotFoundError("/x")) == "Config file '/x' not found or not readable"
        assert str(ConfigNotFoundError("/x", "Permission denied")) == (
            "Config file '/x' not found or not readable: Permission denied"
        )

    def test_invalid_config_line(self) -> None:
        """Test the field, reason, line number and raw line are included."""
        error = InvalidConfigLineError("vf enlan3 x", "vf_index", "not an integer", lineno=4)
        assert str(error) == "Invalid vf_index: not an integer in line (line 4): vf enlan3 x"
        assert error.line == "vf enlan3 x"
        assert error.field == "vf_index"

    def test_mac_range_overflow(self) -> None:
        """Test the required reduction is reported."""
        error = MacRangeOverflowError("enlan3", 5)
        assert str(error) == (
            "LSB in MAC prefix for enlan3 needs to be reduced by 5 to prevent overflow"
        )

    def test_unknown_vf(self) -> None:
        """Test the missing label is reported."""
        assert str(UnknownVFError("enlan3vf99")) == (
            "VF enlan3vf99 does not exist in the configuration"
        )

    def test_pci_slot_not_found(self) -> None:
        """Test PF and VF variants of the message."""
        assert "for enlan3 VF 2:" in str(PciSlotNotFoundError("enlan3", 2, "missing"))
        assert "for enlan3:" in str(PciSlotNotFoundError("enlan3", None, "missing"))

    def test_rename_timeout(self) -> None:
        """Test timeout, device and index are reported."""
        error = RenameTimeoutError("enlan3", 21, 10)
        assert str(error) == (
            "Timeout after 10 seconds: VF network device not found for PF 'enlan3' VF index 21"
        )
