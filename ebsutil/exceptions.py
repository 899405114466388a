"""
Exceptions raised by EBSUtilX.
"""

from typing import List, Optional


class EBSUtilError(Exception):
    """Base exception for EBSUtilX errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NotAnInstanceError(EBSUtilError):
    """The process is not running on an EC2 instance."""

    def __init__(self, message: str = "Not running on an EC2 instance"):
        super().__init__(message)


class MetadataError(EBSUtilError):
    """The instance metadata service returned an error."""

    pass


class InvalidVolumeTypeError(EBSUtilError):
    """Volume type is not one EBS accepts."""

    def __init__(self, volume_type: str):
        super().__init__(f"Invalid volume type for EBS: {volume_type}")
        self.volume_type = volume_type


class InvalidVolumeSizeError(EBSUtilError):
    """Requested volume size is not positive."""

    def __init__(self, size: int):
        super().__init__(f"Invalid volume size: {size}")
        self.size = size


class ProviderError(EBSUtilError):
    """An AWS API call failed."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        error_message: Optional[str] = None,
        status_code: Optional[int] = None,
        request_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.code = code
        self.error_message = error_message
        self.status_code = status_code
        self.request_id = request_id
        self.cause = cause


class UnexpectedStateError(EBSUtilError):
    """Polling finished on a state other than the expected one."""

    def __init__(self, entity_id: str, state: Optional[str], message: Optional[str] = None):
        if message is None:
            message = f"{entity_id} ended in unexpected state {state}"
        super().__init__(message)
        self.entity_id = entity_id
        self.state = state


class PollTimeoutError(UnexpectedStateError):
    """Polling gave up while the entity was still in a transient state."""

    def __init__(self, entity_id: str, state: Optional[str], timeout: float):
        super().__init__(
            entity_id,
            state,
            f"Timed out after {timeout}s waiting for {entity_id}, last state {state}",
        )
        self.timeout = timeout


class VolumeCreateError(EBSUtilError):
    """Volume creation did not reach the available state."""

    def __init__(self, size: int, snapshot_id: str):
        super().__init__(f"Failed creating volume with size {size} and snapshot {snapshot_id}")
        self.size = size
        self.snapshot_id = snapshot_id


class VolumeNotFoundError(EBSUtilError):
    """Volume lookup did not return exactly one volume."""

    def __init__(self, volume_id: str):
        super().__init__(f"Cannot find volume {volume_id}")
        self.volume_id = volume_id


class SnapshotNotFoundError(EBSUtilError):
    """Snapshot lookup returned nothing."""

    def __init__(self, snapshot_id: str):
        super().__init__(f"Cannot find snapshot {snapshot_id}")
        self.snapshot_id = snapshot_id


class DeviceNotFoundError(EBSUtilError):
    """No new block device matched the expected size."""

    def __init__(self, expected_size: int):
        super().__init__(f"Cannot find a device matching description (size {expected_size})")
        self.expected_size = expected_size


class AmbiguousDeviceError(EBSUtilError):
    """More than one new block device matched the expected size."""

    def __init__(self, candidates: List[str]):
        super().__init__(
            "Found more than one device matching description, " + " and ".join(candidates)
        )
        self.candidates = candidates


class NoFreeDeviceError(EBSUtilError):
    """Every candidate device slot is in use."""

    def __init__(self, instance_id: str):
        super().__init__(f"Cannot find an available device for instance {instance_id}")
        self.instance_id = instance_id
