"""Exceptions raised by sriov-net-config.

Every error is fatal: the run stops at the first failure and nothing that was
already applied is rolled back. Errors are split into two families so the
command line can tell a bad configuration file apart from a device that
refused a change.
"""


class SriovNetError(Exception):
    """Base class for all sriov-net-config errors."""

    pass


class ConfigError(SriovNetError):
    """The configuration file is missing, malformed or inconsistent."""

    pass


class ProvisioningError(SriovNetError):
    """A device operation failed while applying the configuration."""

    pass


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file cannot be opened or read."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        message = f"Config file '{path}' not found or not readable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidConfigLineError(ConfigError):
    """Raised for the first configuration line that fails validation.

    Attributes:
        line: The offending raw line
        field: Name of the field that failed ("line" when the line shape is wrong)
        reason: Human-readable description of the failure
        lineno: Line number in the source file, if known
    """

    def __init__(
        self,
        line: str,
        field: str,
        reason: str,
        lineno: int | None = None,
    ) -> None:
        self.line = line
        self.field = field
        self.reason = reason
        self.lineno = lineno
        location = f" (line {lineno})" if lineno is not None else ""
        super().__init__(f"Invalid {field}: {reason} in line{location}: {line}")


class NoPFEntriesError(ConfigError):
    """Raised when PF provisioning is requested without any PF entries."""

    def __init__(self) -> None:
        super().__init__("No PF configuration entries found")


class NoVFEntriesError(ConfigError):
    """Raised when VF provisioning is requested without any VF entries."""

    def __init__(self) -> None:
        super().__init__("No VF configuration entries found")


class MacRangeOverflowError(ConfigError):
    """Raised when a PF's MAC prefix cannot fit one address per VF.

    Attributes:
        device: PF device name
        overage: How many counts the last octet of the prefix must be reduced by
    """

    def __init__(self, device: str, overage: int) -> None:
        self.device = device
        self.overage = overage
        super().__init__(
            f"LSB in MAC prefix for {device} needs to be reduced by {overage} "
            f"to prevent overflow"
        )


class UnknownVFError(ConfigError):
    """Raised when a single VF is requested that is not in the configuration."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"VF {label} does not exist in the configuration")


class PciSlotNotFoundError(ProvisioningError):
    """Raised when the PCI slot name of a device or VF cannot be resolved."""

    def __init__(self, device: str, vf_index: int | None, detail: str) -> None:
        self.device = device
        self.vf_index = vf_index
        what = device if vf_index is None else f"{device} VF {vf_index}"
        super().__init__(f"PCI slot name not found for {what}: {detail}")


class RenameTimeoutError(ProvisioningError):
    """Raised when a VF network device does not appear in time for renaming."""

    def __init__(self, device: str, vf_index: int, timeout: float) -> None:
        self.device = device
        self.vf_index = vf_index
        self.timeout = timeout
        super().__init__(
            f"Timeout after {timeout:g} seconds: VF network device not found "
            f"for PF '{device}' VF index {vf_index}"
        )


class DeviceControlError(ProvisioningError):
    """Raised when a sysfs write or an ip command fails."""

    pass


class OperationCancelledError(ProvisioningError):
    """Raised when a bounded wait is interrupted by shutdown."""

    pass
