"""
EBS volume manager

Creates, attaches, detaches and deletes EBS volumes, and snapshots them,
for the EC2 instance this process runs on. Every operation blocks until
EC2 reports the change as finished.

Attach calls against the same instance must not run concurrently: the
device view taken before the attach would include the other call's device.
"""

import logging
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError

from ..config import ManagerConfig
from ..ec2.metadata import InstanceIdentity, InstanceMetadata, resolve_identity
from ..ec2.volumes import EC2VolumeAPI, create_ec2_client
from ..exceptions import (
    EBSUtilError,
    InvalidVolumeSizeError,
    InvalidVolumeTypeError,
    VolumeCreateError,
)
from ..utils.polling import StatePoller
from ..utils.tags import get_default_tags, merge_tags, tag_specifications
from .devices import BlockDevices, find_new_device
from .slots import find_free_device

__all__ = [
    'GB',
    'VOLUME_TYPES',
    'gib_for_size',
    'validate_volume_type',
    'EBSVolumeManager',
]

GB = 1073741824

VOLUME_TYPES = frozenset(["standard", "gp2", "gp3", "io1", "io2", "st1", "sc1"])

def gib_for_size(size: int) -> int:
    """
    Convert a size in bytes to whole GiB, rounding up.

    Args:
        size: Size in bytes

    Returns:
        int: Size in GiB
    """
    if size <= 0:
        raise InvalidVolumeSizeError(size)
    gib, remainder = divmod(size, GB)
    if remainder:
        gib += 1
    return gib

def validate_volume_type(volume_type: Optional[str]) -> None:
    """Raise InvalidVolumeTypeError unless the type is empty or known."""
    if volume_type and volume_type not in VOLUME_TYPES:
        raise InvalidVolumeTypeError(volume_type)

class EBSVolumeManager:
    """
    Manages the EBS volumes of one EC2 instance.
    """

    def __init__(
        self,
        identity: InstanceIdentity,
        api: EC2VolumeAPI,
        devices: Optional[BlockDevices] = None,
        poller: Optional[StatePoller] = None,
        tags: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the manager.

        Args:
            identity: The instance whose volumes are managed
            api: EC2 volume API
            devices: Local block device view (defaults to /sys/block)
            poller: State poller (defaults to one-second, unbounded polling)
            tags: Extra tags for created volumes and snapshots
            logger: Logger for progress messages
        """
        self.identity = identity
        self.api = api
        self.logger = logger or logging.getLogger(__name__)
        self.devices = devices or BlockDevices()
        self.poller = poller or StatePoller(logger=self.logger)
        self.tags = merge_tags(get_default_tags(identity.instance_id), tags)

    @classmethod
    def from_config(cls, config: Optional[ManagerConfig] = None,
                    logger: Optional[logging.Logger] = None) -> "EBSVolumeManager":
        """
        Build a manager for the instance this process runs on.

        Args:
            config: Configuration (defaults to ManagerConfig.from_env())
            logger: Logger for progress messages

        Returns:
            EBSVolumeManager: A manager bound to this instance

        Raises:
            NotAnInstanceError: Not running on an EC2 instance
        """
        if config is None:
            config = ManagerConfig.from_env()
        logger = logger or logging.getLogger(__name__)

        metadata = InstanceMetadata(config.metadata_url, timeout=config.metadata_timeout)
        identity = resolve_identity(metadata)
        logger.info("Managing volumes of %s in %s (%s)",
                    identity.instance_id, identity.availability_zone, identity.region)

        return cls(
            identity,
            EC2VolumeAPI(create_ec2_client(identity.region)),
            devices=BlockDevices(config.sysfs_block_path),
            poller=StatePoller(config.poll_interval, config.poll_timeout, logger=logger),
            tags=config.tags,
            logger=logger,
        )

    def _resource_tags(self, resource_type: str, tags: Optional[Dict[str, str]]):
        return tag_specifications(resource_type, merge_tags(self.tags, tags))

    def _wait_for_volume_creating(self, volume_id: str) -> None:
        self.poller.wait(
            volume_id,
            lambda: self.api.describe_volume(volume_id),
            transient={"creating"},
            success="available",
            description="volume",
        )

    def create_volume(self, size: int, snapshot_id: str = "", volume_type: str = "",
                      tags: Optional[Dict[str, str]] = None) -> str:
        """
        Create a volume in the instance's availability zone.

        Args:
            size: Size in bytes, rounded up to whole GiB
            snapshot_id: Optional snapshot to restore from
            volume_type: Optional volume type, one of VOLUME_TYPES
            tags: Optional extra tags

        Returns:
            str: ID of the new, available volume

        Raises:
            InvalidVolumeTypeError: Unknown volume type, nothing was sent to EC2
            InvalidVolumeSizeError: Size is not positive
            ProviderError: EC2 refused the request
            VolumeCreateError: The volume never became available or could not be polled
        """
        validate_volume_type(volume_type)
        size_gib = gib_for_size(size)

        volume = self.api.create_volume(
            self.identity.availability_zone,
            size_gib,
            snapshot_id=snapshot_id or None,
            volume_type=volume_type or None,
            tag_specifications=self._resource_tags("volume", tags),
        )
        volume_id = volume["VolumeId"]
        self.logger.debug("Created volume %s (%s GiB)", volume_id, size_gib)

        try:
            self._wait_for_volume_creating(volume_id)
        except (EBSUtilError, BotoCoreError) as e:
            self.logger.debug("Failed to create volume: %s", e)
            try:
                self.delete_volume(volume_id)
            except Exception as delete_error:
                self.logger.error("Failed deleting volume: %s", delete_error)
            raise VolumeCreateError(size, snapshot_id) from e

        return volume_id

    def delete_volume(self, volume_id: str) -> None:
        """
        Delete a volume.

        Args:
            volume_id: ID of the volume

        Raises:
            ProviderError: EC2 refused the request (e.g., the volume is in use)
        """
        self.api.delete_volume(volume_id)

    def describe_volume(self, volume_id: str) -> Dict[str, Any]:
        """
        Fetch a single volume.

        Raises:
            VolumeNotFoundError: EC2 did not return exactly one volume
        """
        return self.api.describe_volume(volume_id)

    def find_free_device(self) -> str:
        """Pick a device name not used by any volume attached to this instance."""
        return find_free_device(self.api, self.identity.instance_id)

    def _current_attachment(self, volume_id: str) -> Optional[Dict[str, Any]]:
        attachments = self.api.describe_volume(volume_id).get("Attachments") or []
        return attachments[0] if attachments else None

    def attach_volume(self, volume_id: str, size: int) -> str:
        """
        Attach a volume to this instance and find its local device.

        Args:
            volume_id: ID of the volume
            size: Size of the volume in bytes, used to recognise the device

        Returns:
            str: Name of the block device the OS created (e.g., xvdf),
                which may differ from the device requested from EC2

        Raises:
            NoFreeDeviceError: Every candidate device is in use
            UnexpectedStateError: The attachment did not reach attached
            DeviceNotFoundError: No new device of that size appeared
            AmbiguousDeviceError: Several new devices of that size appeared
        """
        device = self.find_free_device()
        self.logger.debug("Attaching %s to %s's %s", volume_id, self.identity.instance_id, device)

        # Taken before the attach request so the new device is never part of it
        before = self.devices.list_devices()

        self.api.attach_volume(volume_id, self.identity.instance_id, device)
        self.poller.wait(
            volume_id,
            lambda: self._current_attachment(volume_id),
            transient={"attaching"},
            success="attached",
            description="attachment of",
        )

        return find_new_device(before, size, self.devices)

    def detach_volume(self, volume_id: str) -> None:
        """
        Detach a volume from this instance and wait until it is gone.

        A volume that no longer shows any attachment counts as detached.
        """
        self.api.detach_volume(volume_id, self.identity.instance_id)
        self.poller.wait(
            volume_id,
            lambda: self._current_attachment(volume_id),
            transient={"detaching"},
            success="detached",
            absent_ok=True,
            description="detachment of",
        )

    def _log_snapshot_progress(self, snapshot: Dict[str, Any]) -> None:
        self.logger.debug("Snapshot %s progress %s",
                          snapshot.get("SnapshotId"), snapshot.get("Progress"))

    def create_snapshot(self, volume_id: str, description: str = "",
                        tags: Optional[Dict[str, str]] = None) -> str:
        """
        Snapshot a volume and wait for the snapshot to complete.

        Args:
            volume_id: ID of the volume
            description: Snapshot description
            tags: Optional extra tags

        Returns:
            str: ID of the completed snapshot
        """
        snapshot = self.api.create_snapshot(
            volume_id, description,
            tag_specifications=self._resource_tags("snapshot", tags),
        )
        snapshot_id = snapshot["SnapshotId"]
        if snapshot.get("State") == "completed":
            return snapshot_id

        owner_id = snapshot.get("OwnerId")
        self.poller.wait(
            snapshot_id,
            lambda: self.api.describe_snapshot(snapshot_id, owner_id),
            transient={"pending"},
            success="completed",
            description="snapshot",
            on_transient=self._log_snapshot_progress,
            initial=snapshot,
        )
        return snapshot_id

    def delete_snapshot(self, snapshot_id: str) -> None:
        """
        Delete a snapshot.

        Args:
            snapshot_id: ID of the snapshot
        """
        self.api.delete_snapshot(snapshot_id)
