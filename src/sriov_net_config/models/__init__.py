"""Pydantic models for SR-IOV provisioning.

This module provides the typed records produced from configuration lines and
the resolved per-host configuration built from them.
"""

from sriov_net_config.models.config import ResolvedConfig
from sriov_net_config.models.pf import PfSpec
from sriov_net_config.models.vf import VfSpec, make_vf_label

__all__ = [
    # config
    "ResolvedConfig",
    # pf
    "PfSpec",
    # vf
    "VfSpec",
    "make_vf_label",
]
