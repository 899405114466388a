"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys
from unittest.mock import MagicMock
from botocore.exceptions import ClientError

# Add the parent directory to the path so we can import the ebsutil package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ebsutil.ec2.metadata import InstanceIdentity
from ebsutil.ec2.volumes import EC2VolumeAPI
from ebsutil.utils.polling import StatePoller

def make_client_error(code, message, operation="DescribeVolumes", status=400, request_id="req-1234"):
    """Build a botocore ClientError like the ones boto3 raises."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status, "RequestId": request_id},
        },
        operation,
    )

def volume_record(volume_id, state, attachment_state=None, device="/dev/sdf", instance_id="i-12345"):
    """Build a DescribeVolumes volume record."""
    attachments = []
    if attachment_state is not None:
        attachments.append({
            "VolumeId": volume_id,
            "InstanceId": instance_id,
            "Device": device,
            "State": attachment_state,
        })
    return {
        "VolumeId": volume_id,
        "State": state,
        "Size": 4,
        "AvailabilityZone": "us-west-2a",
        "Attachments": attachments,
    }

class FakeBlockDevices:
    """Block device view that changes on each call to list_devices."""

    def __init__(self, views, sizes):
        self.views = list(views)
        self.sizes = sizes
        self.calls = 0

    def list_devices(self):
        view = self.views[min(self.calls, len(self.views) - 1)]
        self.calls += 1
        return set(view)

    def size_in_bytes(self, name):
        return self.sizes[name]

class RecordingSleep:
    """Records requested sleeps instead of sleeping."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)

@pytest.fixture
def identity():
    """Identity of the fake instance."""
    return InstanceIdentity("i-12345", "us-west-2", "us-west-2a")

@pytest.fixture
def ec2_client():
    """Mock boto3 EC2 client."""
    return MagicMock()

@pytest.fixture
def api(ec2_client):
    """EC2VolumeAPI over the mock client."""
    return EC2VolumeAPI(ec2_client)

@pytest.fixture
def sleep():
    """Sleep function that only records calls."""
    return RecordingSleep()

@pytest.fixture
def poller(sleep):
    """State poller that never really sleeps."""
    return StatePoller(interval=1.0, sleep=sleep)

@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors."""
    return make_client_error

@pytest.fixture
def volume():
    """Factory for DescribeVolumes volume records."""
    return volume_record

@pytest.fixture
def fake_devices():
    """Factory for block device views that change on each listing."""
    return FakeBlockDevices
