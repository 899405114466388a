"""
EBSUtilX: manage the EBS volumes attached to the EC2 instance this process runs on.
"""

from .config import ManagerConfig
from .storage.ebs import EBSVolumeManager

__version__ = "0.1.0"

__all__ = [
    'ManagerConfig',
    'EBSVolumeManager',
]
