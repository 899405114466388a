import pytest
from unittest.mock import MagicMock, patch
from ebsutil.ec2.volumes import EC2VolumeAPI, create_ec2_client
from ebsutil.exceptions import ProviderError, SnapshotNotFoundError, VolumeNotFoundError

def test_create_volume_minimal(api, ec2_client):
    """Test that optional create parameters are left out when unset."""
    ec2_client.create_volume.return_value = {"VolumeId": "vol-1", "State": "creating"}

    volume = api.create_volume("us-west-2a", 4)

    assert volume["VolumeId"] == "vol-1"
    ec2_client.create_volume.assert_called_once_with(AvailabilityZone="us-west-2a", Size=4)

def test_create_volume_all_parameters(api, ec2_client):
    """Test passing snapshot, type and tags through."""
    specs = [{"ResourceType": "volume", "Tags": [{"Key": "a", "Value": "1"}]}]

    api.create_volume("us-west-2a", 8, snapshot_id="snap-1", volume_type="gp3",
                      tag_specifications=specs)

    ec2_client.create_volume.assert_called_once_with(
        AvailabilityZone="us-west-2a",
        Size=8,
        SnapshotId="snap-1",
        VolumeType="gp3",
        TagSpecifications=specs,
    )

def test_describe_volume_single(api, ec2_client, volume):
    """Test fetching one volume by ID."""
    ec2_client.describe_volumes.return_value = {"Volumes": [volume("vol-1", "available")]}

    assert api.describe_volume("vol-1")["State"] == "available"
    ec2_client.describe_volumes.assert_called_once_with(VolumeIds=["vol-1"])

@pytest.mark.parametrize("volumes", [[], ["a", "b"]])
def test_describe_volume_not_exactly_one(api, ec2_client, volumes):
    """Test that zero or several volumes is a lookup failure."""
    ec2_client.describe_volumes.return_value = {"Volumes": volumes}

    with pytest.raises(VolumeNotFoundError, match="Cannot find volume vol-1"):
        api.describe_volume("vol-1")

def test_provider_errors_are_normalized(api, ec2_client, client_error):
    """Test that a failing call raises a ProviderError with code and message."""
    ec2_client.delete_volume.side_effect = client_error(
        "VolumeInUse", "Volume vol-1 is currently attached to i-12345", operation="DeleteVolume")

    with pytest.raises(ProviderError) as excinfo:
        api.delete_volume("vol-1")

    assert excinfo.value.code == "VolumeInUse"
    assert "Volume vol-1 is currently attached to i-12345" in str(excinfo.value)

def test_attached_devices(api, ec2_client, volume):
    """Test listing the devices used by an instance's volumes."""
    paginator = MagicMock()
    paginator.paginate.return_value = [
        {"Volumes": [volume("vol-1", "in-use", "attached", "/dev/sda1"),
                     volume("vol-2", "in-use", "attached", "/dev/sdf")]},
        {"Volumes": [volume("vol-3", "in-use", "attaching", "/dev/sdg"),
                     volume("vol-4", "available")]},
    ]
    ec2_client.get_paginator.return_value = paginator

    devices = api.attached_devices("i-12345")

    assert devices == {"/dev/sda1", "/dev/sdf", "/dev/sdg"}
    ec2_client.get_paginator.assert_called_once_with("describe_volumes")
    paginator.paginate.assert_called_once_with(
        Filters=[{"Name": "attachment.instance-id", "Values": ["i-12345"]}]
    )

def test_attach_and_detach(api, ec2_client):
    """Test the attach and detach calls."""
    api.attach_volume("vol-1", "i-12345", "/dev/sdf")
    api.detach_volume("vol-1", "i-12345")

    ec2_client.attach_volume.assert_called_once_with(
        Device="/dev/sdf", InstanceId="i-12345", VolumeId="vol-1")
    ec2_client.detach_volume.assert_called_once_with(VolumeId="vol-1", InstanceId="i-12345")

def test_snapshot_calls(api, ec2_client):
    """Test creating, describing and deleting snapshots."""
    ec2_client.create_snapshot.return_value = {"SnapshotId": "snap-1", "State": "pending"}
    ec2_client.describe_snapshots.return_value = {
        "Snapshots": [{"SnapshotId": "snap-1", "State": "completed"}]
    }

    assert api.create_snapshot("vol-1", "nightly")["SnapshotId"] == "snap-1"
    assert api.describe_snapshot("snap-1", "123456789012")["State"] == "completed"
    api.delete_snapshot("snap-1")

    ec2_client.create_snapshot.assert_called_once_with(VolumeId="vol-1", Description="nightly")
    ec2_client.describe_snapshots.assert_called_once_with(
        SnapshotIds=["snap-1"], OwnerIds=["123456789012"])
    ec2_client.delete_snapshot.assert_called_once_with(SnapshotId="snap-1")

def test_describe_snapshot_missing(api, ec2_client):
    """Test that an empty snapshot lookup raises SnapshotNotFoundError."""
    ec2_client.describe_snapshots.return_value = {"Snapshots": []}

    with pytest.raises(SnapshotNotFoundError):
        api.describe_snapshot("snap-1")

    ec2_client.describe_snapshots.assert_called_once_with(SnapshotIds=["snap-1"])

@patch('ebsutil.ec2.volumes.boto3.session.Session')
def test_create_ec2_client(mock_session):
    """Test building the boto3 client for a region."""
    client = create_ec2_client("eu-central-1")

    mock_session.return_value.client.assert_called_once_with("ec2", region_name="eu-central-1")
    assert client is mock_session.return_value.client.return_value
