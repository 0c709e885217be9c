"""Virtual Function (VF) configuration model."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sriov_net_config.validators import is_bool, is_integer, is_word


def make_vf_label(device: str, vf_index: int) -> str:
    """Build the predictable name of a VF (e.g., enlan3vf21).

    The label is both the key of a VF in the resolved configuration and the
    name the VF network device is renamed to.
    """
    return f"{device}vf{vf_index}"


class VfSpec(BaseModel):
    """Provisioning intent for one virtual function.

    Created from a
    ``vf <device> <vf_index> <vlan> <activate> <rename> <driver> [comment]``
    line and keyed by :attr:`label`.
    """

    model_config = ConfigDict(frozen=True)

    device: Annotated[str, Field(description="Parent PF network device name")]
    vf_index: Annotated[int, Field(ge=0, description="VF index on the PF")]
    vlan: Annotated[int, Field(ge=0, description="VLAN ID (0 disables tagging)")]
    activate: Annotated[bool, Field(description="Bind the VF to driver")]
    rename: Annotated[bool, Field(description="Rename the VF netdev to its label")]
    driver: Annotated[str, Field(description="Kernel driver to bind (e.g., iavf, vfio-pci)")]
    comment: Annotated[str | None, Field(None, description="Free-form trailing comment")]

    @field_validator("device", "driver", mode="before")
    @classmethod
    def validate_word(cls, v: Any) -> Any:
        """Validate device and driver names are plain word tokens."""
        if isinstance(v, str) and not is_word(v):
            raise ValueError(f"'{v}' is not a valid name")
        return v

    @field_validator("vf_index", "vlan", mode="before")
    @classmethod
    def validate_integer(cls, v: Any) -> Any:
        """Validate numeric tokens are plain non-negative decimals."""
        if isinstance(v, str) and not is_integer(v):
            raise ValueError(f"'{v}' is not a non-negative integer")
        return v

    @field_validator("activate", "rename", mode="before")
    @classmethod
    def validate_flag(cls, v: Any) -> Any:
        """Accept only the literal 'true'/'false' for flag tokens."""
        if isinstance(v, str):
            if not is_bool(v):
                raise ValueError(f"'{v}' is not 'true' or 'false'")
            return v == "true"
        return v

    @property
    def label(self) -> str:
        """Configuration key and rename target of this VF."""
        return make_vf_label(self.device, self.vf_index)
