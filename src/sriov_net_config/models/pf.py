"""Physical Function (PF) configuration model."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sriov_net_config.errors import MacRangeOverflowError
from sriov_net_config.validators import is_integer, is_mac, is_word

MAX_OCTET = 0xFF


class PfSpec(BaseModel):
    """Provisioning intent for one SR-IOV capable adapter.

    Created from a ``pf <device> <vf_count> <mac_prefix> [comment]`` line.
    The last octet of ``mac_prefix`` is the address of VF 0; VF ``i`` gets
    that octet plus ``i``.
    """

    model_config = ConfigDict(frozen=True)

    device: Annotated[str, Field(description="PF network device name (e.g., enlan3)")]
    vf_count: Annotated[int, Field(ge=0, description="Number of VFs to create")]
    mac_prefix: Annotated[str, Field(description="MAC address of VF 0 (e.g., aa:bb:cc:dd:ee:00)")]
    comment: Annotated[str | None, Field(None, description="Free-form trailing comment")]

    @field_validator("device", mode="before")
    @classmethod
    def validate_device(cls, v: Any) -> Any:
        """Validate the device name is a plain word token."""
        if isinstance(v, str) and not is_word(v):
            raise ValueError(f"'{v}' is not a valid device name")
        return v

    @field_validator("vf_count", mode="before")
    @classmethod
    def validate_vf_count(cls, v: Any) -> Any:
        """Validate VF count tokens are plain non-negative decimals."""
        if isinstance(v, str) and not is_integer(v):
            raise ValueError(f"'{v}' is not a non-negative integer")
        return v

    @field_validator("mac_prefix")
    @classmethod
    def validate_mac_prefix(cls, v: str) -> str:
        """Validate the prefix is a full 6-octet MAC address."""
        if not is_mac(v):
            raise ValueError(f"'{v}' is not a valid MAC address")
        return v

    def mac_octets(self) -> list[str]:
        """Return the six octets of the MAC prefix as hex strings."""
        return self.mac_prefix.split(":")

    def mac_overflow(self) -> int:
        """Return how far the last VF's octet would exceed 0xff.

        Zero or less means every VF fits in the last octet.
        """
        start = int(self.mac_octets()[5], 16)
        return (start + self.vf_count - 1) - MAX_OCTET

    def vf_mac_addresses(self) -> list[str]:
        """Derive one MAC address per VF, in VF index order.

        Returns:
            List of ``vf_count`` addresses sharing the first five octets

        Raises:
            MacRangeOverflowError: If the last octet would run past 0xff
        """
        overage = self.mac_overflow()
        if overage > 0:
            raise MacRangeOverflowError(self.device, overage)

        octets = self.mac_octets()
        start = int(octets[5], 16)
        head = ":".join(octets[:5])
        return [f"{head}:{start + i:02x}" for i in range(self.vf_count)]
