"""
Storage components: EBS volume lifecycle and local block devices.
"""

from .ebs import EBSVolumeManager, GB, VOLUME_TYPES, gib_for_size, validate_volume_type
from .devices import BlockDevices, find_new_device, SECTOR_SIZE
from .slots import CANDIDATE_DEVICES, find_free_device, pick_free_device

__all__ = [
    'EBSVolumeManager',
    'GB',
    'VOLUME_TYPES',
    'gib_for_size',
    'validate_volume_type',
    'BlockDevices',
    'find_new_device',
    'SECTOR_SIZE',
    'CANDIDATE_DEVICES',
    'find_free_device',
    'pick_free_device',
]
