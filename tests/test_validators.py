"""Tests for configuration token validators."""

from sriov_net_config.validators import is_bool, is_integer, is_mac, is_word


class TestIsWord:
    """Tests for device and driver name validation."""

    def test_valid_names(self) -> None:
        """Test typical device and driver names."""
        assert is_word("enlan3")
        assert is_word("vfio-pci")
        assert is_word("mlx5_core")
        assert is_word("0")

    def test_invalid_names(self) -> None:
        """Test names with characters outside [A-Za-z0-9_-]."""
        assert not is_word("")
        assert not is_word("en lan3")
        assert not is_word("enlan3.100")
        assert not is_word("enlan3;rm")
        assert not is_word("enlan3\n")


class TestIsInteger:
    """Tests for non-negative integer validation."""

    def test_valid_integers(self) -> None:
        """Test plain decimal integers, including leading zeros."""
        assert is_integer("0")
        assert is_integer("42")
        assert is_integer("007")

    def test_invalid_integers(self) -> None:
        """Test signs, decimals, hex and empty strings are rejected."""
        assert not is_integer("")
        assert not is_integer("-1")
        assert not is_integer("+1")
        assert not is_integer("1.5")
        assert not is_integer("0x10")
        assert not is_integer(" 1")


class TestIsBool:
    """Tests for boolean flag validation."""

    def test_literal_flags(self) -> None:
        """Test only lowercase true/false are accepted."""
        assert is_bool("true")
        assert is_bool("false")

    def test_other_spellings_rejected(self) -> None:
        """Test common alternative spellings are rejected."""
        assert not is_bool("True")
        assert not is_bool("yes")
        assert not is_bool("1")
        assert not is_bool("")


class TestIsMac:
    """Tests for MAC address validation."""

    def test_valid_macs(self) -> None:
        """Test lower, upper and mixed case hex octets."""
        assert is_mac("aa:bb:cc:dd:ee:ff")
        assert is_mac("00:11:22:33:44:55")
        assert is_mac("AA:bb:0C:dD:ee:F0")

    def test_invalid_macs(self) -> None:
        """Test malformed addresses."""
        assert not is_mac("aa:bb:cc:dd:ee")
        assert not is_mac("aa:bb:cc:dd:ee:ff:00")
        assert not is_mac("aa-bb-cc-dd-ee-ff")
        assert not is_mac("a:bb:cc:dd:ee:ff")
        assert not is_mac("gg:bb:cc:dd:ee:ff")
        assert not is_mac("aabb.ccdd.eeff")
