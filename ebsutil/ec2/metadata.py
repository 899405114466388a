import json
import requests
from typing import NamedTuple, Optional

from ..config import DEFAULT_METADATA_URL
from ..exceptions import MetadataError, NotAnInstanceError

TOKEN_TTL_SECONDS = 21600

class InstanceIdentity(NamedTuple):
    """Identity of the EC2 instance this process runs on."""
    instance_id: str
    region: str
    availability_zone: str

class InstanceMetadata:
    """
    Client for the EC2 instance metadata service.

    Uses an IMDSv2 session token when the service hands one out and falls
    back to plain IMDSv1 requests otherwise.
    """

    def __init__(self, base_url: str = DEFAULT_METADATA_URL, timeout: float = 2.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._token: Optional[str] = None

    def _fetch_token(self) -> Optional[str]:
        try:
            response = self.session.put(
                f"{self.base_url}/api/token",
                headers={"X-aws-ec2-metadata-token-ttl-seconds": str(TOKEN_TTL_SECONDS)},
                timeout=self.timeout,
            )
        except requests.RequestException:
            return None
        return response.text if response.status_code == 200 else None

    def _headers(self):
        if self._token is None:
            self._token = self._fetch_token()
        return {"X-aws-ec2-metadata-token": self._token} if self._token else {}

    def _get(self, path: str) -> str:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise MetadataError(f"Failed to read instance metadata {path}: {e}")
        if response.status_code != 200:
            raise MetadataError(
                f"Instance metadata {path} returned status {response.status_code}"
            )
        return response.text

    def available(self) -> bool:
        """
        Check whether the metadata service answers.

        Returns:
            bool: True when running on an EC2 instance
        """
        try:
            self._get("meta-data/instance-id")
        except MetadataError:
            return False
        return True

    def get_metadata(self, key: str) -> str:
        """
        Read a key under ``meta-data/``.

        Args:
            key: Metadata key (e.g., instance-id, placement/availability-zone)

        Returns:
            str: The value
        """
        return self._get(f"meta-data/{key}").strip()

    def region(self) -> str:
        """
        Read the instance's region from its identity document.

        Returns:
            str: The region name (e.g., us-west-2)
        """
        document = self._get("dynamic/instance-identity/document")
        try:
            region = json.loads(document).get("region")
        except ValueError as e:
            raise MetadataError(f"Malformed instance identity document: {e}")
        if not region:
            raise MetadataError("Instance identity document has no region")
        return region

def is_ec2_instance(metadata: InstanceMetadata) -> bool:
    """Return True when the metadata service is reachable."""
    return metadata.available()

def resolve_identity(metadata: InstanceMetadata) -> InstanceIdentity:
    """
    Determine the instance ID, region and availability zone.

    Args:
        metadata: Metadata service client

    Returns:
        InstanceIdentity: The identity of this instance

    Raises:
        NotAnInstanceError: The metadata service is unavailable
        MetadataError: A metadata key could not be read
    """
    if not is_ec2_instance(metadata):
        raise NotAnInstanceError()

    instance_id = metadata.get_metadata("instance-id")
    region = metadata.region()
    availability_zone = metadata.get_metadata("placement/availability-zone")
    return InstanceIdentity(instance_id, region, availability_zone)
