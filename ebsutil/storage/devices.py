"""
Local block device discovery.

After EC2 reports a volume as attached, the operating system picks the name
of the new block device itself (``sdf``, ``xvdf``, ``nvme1n1`` ...). The new
device is identified by comparing the devices visible before and after the
attach and keeping the one whose size matches the volume.

Two volumes of identical size attached at the same time cannot be told
apart; that case is reported as ambiguous instead of guessed.
"""

import os
from typing import Iterable, List, Set

from ..exceptions import AmbiguousDeviceError, DeviceNotFoundError

SECTOR_SIZE = 512

class BlockDevices:
    """Block devices as listed under ``/sys/block``."""

    def __init__(self, sysfs_path: str = "/sys/block"):
        self.sysfs_path = sysfs_path

    def list_devices(self) -> Set[str]:
        """
        List the names of the block devices currently visible.

        Returns:
            Set[str]: Device names (e.g., sda, xvdf)
        """
        return set(os.listdir(self.sysfs_path))

    def size_in_sectors(self, name: str) -> int:
        with open(os.path.join(self.sysfs_path, name, "size")) as f:
            return int(f.read().strip())

    def size_in_bytes(self, name: str) -> int:
        return self.size_in_sectors(name) * SECTOR_SIZE

def find_new_device(before: Iterable[str], expected_size: int, devices: BlockDevices) -> str:
    """
    Find the single device that appeared since ``before`` with the given size.

    Args:
        before: Device names visible before the attach request
        expected_size: Size of the attached volume in bytes
        devices: Source of the current device view

    Returns:
        str: Name of the new device

    Raises:
        DeviceNotFoundError: No new device has the expected size
        AmbiguousDeviceError: More than one new device has the expected size
    """
    before = set(before)
    matches: List[str] = []
    for name in sorted(devices.list_devices() - before):
        if devices.size_in_bytes(name) == expected_size:
            matches.append(name)

    if not matches:
        raise DeviceNotFoundError(expected_size)
    if len(matches) > 1:
        raise AmbiguousDeviceError(matches)
    return matches[0]
