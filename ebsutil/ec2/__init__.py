"""
EC2 components: instance metadata and the EBS volume API.
"""

from .metadata import InstanceIdentity, InstanceMetadata, is_ec2_instance, resolve_identity
from .volumes import EC2VolumeAPI, create_ec2_client

__all__ = [
    'InstanceIdentity',
    'InstanceMetadata',
    'is_ec2_instance',
    'resolve_identity',
    'EC2VolumeAPI',
    'create_ec2_client',
]
