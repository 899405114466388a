import boto3
from typing import Any, Dict, List, Optional, Set

from ..exceptions import SnapshotNotFoundError, VolumeNotFoundError
from ..utils.errors import aws_errors

def create_ec2_client(region: str):
    """
    Create a boto3 EC2 client for a region.

    Args:
        region: AWS region name

    Returns:
        A boto3 EC2 client
    """
    return boto3.session.Session().client("ec2", region_name=region)

class EC2VolumeAPI:
    """
    The EC2 volume and snapshot calls used by the volume manager.

    Every method re-raises botocore ClientErrors as ProviderErrors.
    """

    def __init__(self, client):
        self.client = client

    @aws_errors
    def create_volume(self, availability_zone: str, size_gib: int,
                      snapshot_id: Optional[str] = None,
                      volume_type: Optional[str] = None,
                      tag_specifications: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Request a new volume.

        Args:
            availability_zone: Zone to create the volume in
            size_gib: Size in GiB
            snapshot_id: Optional snapshot to restore from
            volume_type: Optional volume type (provider default when omitted)
            tag_specifications: Optional EC2 TagSpecifications

        Returns:
            Dict[str, Any]: The volume record, usually in the creating state
        """
        params = {
            "AvailabilityZone": availability_zone,
            "Size": size_gib,
        }
        if snapshot_id:
            params["SnapshotId"] = snapshot_id
        if volume_type:
            params["VolumeType"] = volume_type
        if tag_specifications:
            params["TagSpecifications"] = tag_specifications
        return self.client.create_volume(**params)

    @aws_errors
    def delete_volume(self, volume_id: str) -> None:
        """
        Delete a volume.

        Args:
            volume_id: ID of the volume
        """
        self.client.delete_volume(VolumeId=volume_id)

    @aws_errors
    def describe_volumes(self, volume_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Look up volumes by ID.

        Args:
            volume_ids: IDs of the volumes

        Returns:
            List[Dict[str, Any]]: The volume records EC2 returned
        """
        response = self.client.describe_volumes(VolumeIds=volume_ids)
        return response.get("Volumes", [])

    def describe_volume(self, volume_id: str) -> Dict[str, Any]:
        """
        Fetch a single volume by ID.

        Args:
            volume_id: ID of the volume

        Returns:
            Dict[str, Any]: The volume record

        Raises:
            VolumeNotFoundError: The lookup did not return exactly one volume
        """
        volumes = self.describe_volumes([volume_id])
        if len(volumes) != 1:
            raise VolumeNotFoundError(volume_id)
        return volumes[0]

    @aws_errors
    def attached_devices(self, instance_id: str) -> Set[str]:
        """
        List the device names of volumes attached to an instance.

        Args:
            instance_id: ID of the instance

        Returns:
            Set[str]: Device names (e.g., /dev/sdf)
        """
        paginator = self.client.get_paginator("describe_volumes")
        pages = paginator.paginate(
            Filters=[{"Name": "attachment.instance-id", "Values": [instance_id]}]
        )
        devices = set()
        for page in pages:
            for volume in page.get("Volumes", []):
                attachments = volume.get("Attachments") or []
                if not attachments:
                    continue
                devices.add(attachments[0]["Device"])
        return devices

    @aws_errors
    def attach_volume(self, volume_id: str, instance_id: str, device: str) -> Dict[str, Any]:
        """
        Request attaching a volume to an instance.

        Args:
            volume_id: ID of the volume
            instance_id: ID of the instance
            device: Device name to expose the volume as (e.g., /dev/sdf)

        Returns:
            Dict[str, Any]: The attachment record, usually in the attaching state
        """
        return self.client.attach_volume(
            Device=device,
            InstanceId=instance_id,
            VolumeId=volume_id,
        )

    @aws_errors
    def detach_volume(self, volume_id: str, instance_id: str) -> Dict[str, Any]:
        """
        Request detaching a volume from an instance.

        Args:
            volume_id: ID of the volume
            instance_id: ID of the instance

        Returns:
            Dict[str, Any]: The attachment record, usually in the detaching state
        """
        return self.client.detach_volume(
            VolumeId=volume_id,
            InstanceId=instance_id,
        )

    @aws_errors
    def create_snapshot(self, volume_id: str, description: str,
                        tag_specifications: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Request a snapshot of a volume.

        Args:
            volume_id: ID of the volume
            description: Snapshot description
            tag_specifications: Optional EC2 TagSpecifications

        Returns:
            Dict[str, Any]: The snapshot record, usually in the pending state
        """
        params = {
            "VolumeId": volume_id,
            "Description": description,
        }
        if tag_specifications:
            params["TagSpecifications"] = tag_specifications
        return self.client.create_snapshot(**params)

    @aws_errors
    def delete_snapshot(self, snapshot_id: str) -> None:
        """
        Delete a snapshot.

        Args:
            snapshot_id: ID of the snapshot
        """
        self.client.delete_snapshot(SnapshotId=snapshot_id)

    @aws_errors
    def describe_snapshot(self, snapshot_id: str, owner_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch a snapshot by ID, restricted to its owner when known.

        Args:
            snapshot_id: ID of the snapshot
            owner_id: Account ID owning the snapshot

        Returns:
            Dict[str, Any]: The snapshot record

        Raises:
            SnapshotNotFoundError: No snapshot was returned
        """
        params: Dict[str, Any] = {"SnapshotIds": [snapshot_id]}
        if owner_id:
            params["OwnerIds"] = [owner_id]
        snapshots = self.client.describe_snapshots(**params).get("Snapshots", [])
        if not snapshots:
            raise SnapshotNotFoundError(snapshot_id)
        return snapshots[0]
