"""Tests for the configuration report."""

from pathlib import Path

from sriov_net_config.models import PfSpec, ResolvedConfig, VfSpec
from sriov_net_config.parser import parse_config
from sriov_net_config.report import build_report, format_pf_entry, format_vf_entry


class TestReport:
    """Tests for report formatting."""

    def test_vf_entry(self) -> None:
        """Test a VF entry lists every field and the comment."""
        vf = VfSpec(
            device="enlan3",
            vf_index=0,
            vlan=100,
            activate=True,
            rename=False,
            driver="iavf",
            comment="# management",
        )

        assert format_vf_entry("enlan3vf0", vf) == [
            "Key:         enlan3vf0",
            "  Device:    enlan3",
            "  VF Index:  0",
            "  VLAN:      100",
            "  Activate:  true",
            "  Rename:    false",
            "  Driver:    iavf",
            "  Comment:   # management",
        ]

    def test_pf_entry_without_comment(self) -> None:
        """Test a PF entry without comment has no comment line."""
        pf = PfSpec(device="enlan3", vf_count=4, mac_prefix="aa:bb:cc:dd:ee:00")

        assert format_pf_entry("enlan3", pf) == [
            "Key:         enlan3",
            "  Device:    enlan3",
            "  Num VFs:   4",
            "  MAC Prefix:aa:bb:cc:dd:ee:00",
        ]

    def test_empty_config(self) -> None:
        """Test an empty configuration still has both headings."""
        assert build_report(ResolvedConfig()) == [
            "=== VF Configuration Entries ===",
            "=== PF Configuration Entries ===",
        ]

    def test_report_from_file(self, config_file: Path) -> None:
        """Test the report reflects the host override and sorts entries."""
        config = parse_config(config_file, "hv01")

        report = build_report(config)

        assert report[0] == "=== Configuration for host hv01 ==="
        keys = [line.split()[1] for line in report if line.startswith("Key:")]
        assert keys == ["enlan3vf0", "enlan3vf1", "enlan3", "enlan4"]
        assert "  Comment:   # hv01 override" in report

    def test_report_does_not_modify_config(self, config_file: Path) -> None:
        """Test building a report leaves the configuration unchanged."""
        config = parse_config(config_file, "hv01")
        before = config.model_dump()

        build_report(config)

        assert config.model_dump() == before
