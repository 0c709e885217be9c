"""Resolved configuration model."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from sriov_net_config.errors import UnknownVFError
from sriov_net_config.models.pf import PfSpec
from sriov_net_config.models.vf import VfSpec, make_vf_label


class ResolvedConfig(BaseModel):
    """Effective PF and VF configuration for one host.

    Global entries are merged first and host entries second, so a host entry
    replaces a global entry with the same key.
    """

    model_config = ConfigDict(frozen=True)

    host: Annotated[str | None, Field(None, description="Host identity the config was resolved for")]
    pf_config: Annotated[
        dict[str, PfSpec], Field(default_factory=dict, description="PF specs keyed by device")
    ]
    vf_config: Annotated[
        dict[str, VfSpec], Field(default_factory=dict, description="VF specs keyed by label")
    ]

    def get_vf(self, device: str, vf_index: int) -> VfSpec:
        """Look up a single VF by device and index.

        Raises:
            UnknownVFError: If no VF with that label is configured
        """
        label = make_vf_label(device, vf_index)
        try:
            return self.vf_config[label]
        except KeyError:
            raise UnknownVFError(label) from None
