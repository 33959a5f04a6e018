"""
Typed XenAPI failures.

A failed call returns an error description: the error code followed by
code-specific detail fields. Each known code maps to its own exception
class; anything else becomes a :class:`GenericError`.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from xenrpc.errors import XenRPCError


class GenericError(XenRPCError):
    """An API call failed. ``details`` holds the fields after the error code."""

    def __init__(self, code: str, details: Iterable[str] = ()) -> None:
        self.details = list(details)
        super().__init__(f"{code} {self.details}", code=code)


class BootloaderFailed(GenericError): pass
class DeviceAlreadyDetached(GenericError): pass
class DeviceDetachRejected(GenericError): pass
class EventsLost(GenericError): pass
class HAOperationWouldBreakFailoverPlan(GenericError): pass
class HostNameInvalid(GenericError): pass
class HostNotEnoughFreeMemory(GenericError): pass
class IsTunnelAccessPIF(GenericError): pass
class JoiningHostCannotContainSharedSRs(GenericError): pass
class LicenceRestriction(GenericError): pass
class LicenseProcessingError(GenericError): pass
class NoHostsAvailable(GenericError): pass
class OpenvswitchNotActive(GenericError): pass
class OperationNotAllowed(GenericError): pass
class OtherOperationInProgress(GenericError): pass
class PIFIsPhysical(GenericError): pass
class PIFTunnelStillExists(GenericError): pass
class SessionAuthenticationFailed(GenericError): pass
class SessionNotRegistered(GenericError): pass
class SRFull(GenericError): pass
class SRHasPBD(GenericError): pass
class SROperationNotSupported(GenericError): pass
class SRUnknownDriver(GenericError): pass
class TransportPIFNotConfigured(GenericError): pass
class UnknownBootloader(GenericError): pass
class VBDIsEmpty(GenericError): pass
class VBDNotEmpty(GenericError): pass
class VBDNotRemovableMedia(GenericError): pass
class VlanTagInvalid(GenericError): pass
class VMBadPowerState(GenericError): pass
class VMCheckpointResumeFailed(GenericError): pass
class VMCheckpointSuspendFailed(GenericError): pass
class VMHVMRequired(GenericError): pass
class VMIsTemplate(GenericError): pass
class VMMigrateFailed(GenericError): pass
class VMMissingPVDrivers(GenericError): pass
class VMRequiresSR(GenericError): pass
class VMRevertFailed(GenericError): pass
class VMSnapshotWithQuiesceFailed(GenericError): pass
class VMSnapshotWithQuiesceNotSupported(GenericError): pass
class VMSnapshotWithQuiescePluginDoesNotRespond(GenericError): pass
class VMSnapshotWithQuiesceTimeout(GenericError): pass


_FAILURES: dict[str, type[GenericError]] = {
    "BOOTLOADER_FAILED": BootloaderFailed,
    "DEVICE_ALREADY_DETACHED": DeviceAlreadyDetached,
    "DEVICE_DETACH_REJECTED": DeviceDetachRejected,
    "EVENTS_LOST": EventsLost,
    "HA_OPERATION_WOULD_BREAK_FAILOVER_PLAN": HAOperationWouldBreakFailoverPlan,
    "HOST_NAME_INVALID": HostNameInvalid,
    "HOST_NOT_ENOUGH_FREE_MEMORY": HostNotEnoughFreeMemory,
    "IS_TUNNEL_ACCESS_PIF": IsTunnelAccessPIF,
    "JOINING_HOST_CANNOT_CONTAIN_SHARED_SRS": JoiningHostCannotContainSharedSRs,
    "LICENCE_RESTRICTION": LicenceRestriction,
    "LICENSE_PROCESSING_ERROR": LicenseProcessingError,
    "NO_HOSTS_AVAILABLE": NoHostsAvailable,
    "OPENVSWITCH_NOT_ACTIVE": OpenvswitchNotActive,
    "OPERATION_NOT_ALLOWED": OperationNotAllowed,
    "OTHER_OPERATION_IN_PROGRESS": OtherOperationInProgress,
    "PIF_IS_PHYSICAL": PIFIsPhysical,
    "PIF_TUNNEL_STILL_EXISTS": PIFTunnelStillExists,
    "SESSION_AUTHENTICATION_FAILED": SessionAuthenticationFailed,
    "SESSION_NOT_REGISTERED": SessionNotRegistered,
    "SR_FULL": SRFull,
    "SR_HAS_PBD": SRHasPBD,
    # Misspelled variant of SR_HAS_PBD.
    "SR_HAS_PDB": SRHasPBD,
    "SR_OPERATION_NOT_SUPPORTED": SROperationNotSupported,
    "SR_UNKNOWN_DRIVER": SRUnknownDriver,
    "TRANSPORT_PIF_NOT_CONFIGURED": TransportPIFNotConfigured,
    "UNKNOWN_BOOTLOADER": UnknownBootloader,
    "VBD_IS_EMPTY": VBDIsEmpty,
    "VBD_NOT_EMPTY": VBDNotEmpty,
    "VBD_NOT_REMOVABLE_MEDIA": VBDNotRemovableMedia,
    "VLAN_TAG_INVALID": VlanTagInvalid,
    "VM_BAD_POWER_STATE": VMBadPowerState,
    "VM_CHECKPOINT_RESUME_FAILED": VMCheckpointResumeFailed,
    "VM_CHECKPOINT_SUSPEND_FAILED": VMCheckpointSuspendFailed,
    "VM_HVM_REQUIRED": VMHVMRequired,
    "VM_IS_TEMPLATE": VMIsTemplate,
    "VM_MIGRATE_FAILED": VMMigrateFailed,
    "VM_MISSING_PV_DRIVERS": VMMissingPVDrivers,
    "VM_REQUIRES_SR": VMRequiresSR,
    "VM_REVERT_FAILED": VMRevertFailed,
    "VM_SNAPSHOT_WITH_QUIESCE_FAILED": VMSnapshotWithQuiesceFailed,
    "VM_SNAPSHOT_WITH_QUIESCE_NOT_SUPPORTED": VMSnapshotWithQuiesceNotSupported,
    "VM_SNAPSHOT_WITH_QUIESCE_PLUGIN_DOES_NOT_RESPOND": VMSnapshotWithQuiescePluginDoesNotRespond,
    "VM_SNAPSHOT_WITH_QUIESCE_TIMEOUT": VMSnapshotWithQuiesceTimeout,
}


def exception_class_from_desc(code: str) -> type[GenericError]:
    """Return the exception class for an error code, ``GenericError`` if unknown."""
    return _FAILURES.get(code, GenericError)


def failure_from_description(desc: Sequence[str]) -> GenericError:
    """Build the exception for a full error description (code first)."""
    if not desc:
        return GenericError("")
    code = str(desc[0])
    return exception_class_from_desc(code)(code, desc[1:])
