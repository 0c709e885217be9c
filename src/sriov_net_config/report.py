"""Configuration report.

Builds a human-readable breakdown of a resolved configuration, useful for
checking what a host will get before provisioning it.
"""

from sriov_net_config.models import PfSpec, ResolvedConfig, VfSpec


def _flag(value: bool) -> str:
    return "true" if value else "false"


def format_vf_entry(key: str, vf: VfSpec) -> list[str]:
    """Format one VF entry as report lines."""
    lines = [
        f"Key:         {key}",
        f"  Device:    {vf.device}",
        f"  VF Index:  {vf.vf_index}",
        f"  VLAN:      {vf.vlan}",
        f"  Activate:  {_flag(vf.activate)}",
        f"  Rename:    {_flag(vf.rename)}",
        f"  Driver:    {vf.driver}",
    ]
    if vf.comment:
        lines.append(f"  Comment:   {vf.comment}")
    return lines


def format_pf_entry(key: str, pf: PfSpec) -> list[str]:
    """Format one PF entry as report lines."""
    lines = [
        f"Key:         {key}",
        f"  Device:    {pf.device}",
        f"  Num VFs:   {pf.vf_count}",
        f"  MAC Prefix:{pf.mac_prefix}",
    ]
    if pf.comment:
        lines.append(f"  Comment:   {pf.comment}")
    return lines


def build_report(config: ResolvedConfig) -> list[str]:
    """Build the detailed configuration breakdown.

    VF entries come first, then PF entries, each sorted by key. The
    configuration is only read.

    Args:
        config: Resolved configuration to describe

    Returns:
        Report lines, without trailing newlines
    """
    lines: list[str] = []
    if config.host:
        lines.append(f"=== Configuration for host {config.host} ===")

    lines.append("=== VF Configuration Entries ===")
    for key, vf in sorted(config.vf_config.items()):
        lines.extend(format_vf_entry(key, vf))
        lines.append("")

    lines.append("=== PF Configuration Entries ===")
    for key, pf in sorted(config.pf_config.items()):
        lines.extend(format_pf_entry(key, pf))
        lines.append("")

    return lines
