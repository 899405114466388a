from typing import Any, Dict, List, Optional

def get_default_tags(instance_id: str) -> Dict[str, str]:
    """
    Get default tags for volumes and snapshots created by EBSUtilX.

    Args:
        instance_id: ID of the instance creating the resource

    Returns:
        Dict[str, str]: Dictionary of default tags
    """
    return {
        "ManagedBy": "EBSUtilX",
        "CreatedBy": instance_id,
    }

def merge_tags(default_tags: Dict[str, str], custom_tags: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Merge default tags with custom tags.

    Args:
        default_tags: Default tags dictionary
        custom_tags: Optional custom tags dictionary

    Returns:
        Dict[str, str]: Merged tags dictionary
    """
    if custom_tags is None:
        return default_tags

    return {**default_tags, **custom_tags}

def tag_specifications(resource_type: str, tags: Optional[Dict[str, str]]) -> List[Dict[str, Any]]:
    """
    Format tags as an EC2 TagSpecifications list.

    Args:
        resource_type: EC2 resource type (volume, snapshot)
        tags: Tags to apply

    Returns:
        List[Dict[str, Any]]: TagSpecifications, empty when there are no tags
    """
    if not tags:
        return []

    return [{
        "ResourceType": resource_type,
        "Tags": [{"Key": key, "Value": value} for key, value in sorted(tags.items())],
    }]
