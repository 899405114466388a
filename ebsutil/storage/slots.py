from typing import Iterable, List

from ..exceptions import NoFreeDeviceError

# Device names AWS recommends for EBS volumes
DEVICE_LETTERS = "fghijklmnop"
CANDIDATE_DEVICES: List[str] = ["/dev/sd" + letter for letter in DEVICE_LETTERS]

def pick_free_device(in_use: Iterable[str], instance_id: str) -> str:
    """
    Pick a candidate device name that no attached volume uses.

    Args:
        in_use: Device names of the volumes attached to the instance
        instance_id: ID of the instance, used in the error message

    Returns:
        str: A free device name; which one is not guaranteed

    Raises:
        NoFreeDeviceError: All candidate devices are in use
    """
    taken = set(in_use)
    free = [device for device in CANDIDATE_DEVICES if device not in taken]
    if not free:
        raise NoFreeDeviceError(instance_id)
    return free[0]

def find_free_device(api, instance_id: str) -> str:
    """
    Ask EC2 which devices the instance uses and pick a free one.

    Args:
        api: EC2VolumeAPI used to list attached devices
        instance_id: ID of the instance

    Returns:
        str: A free device name
    """
    return pick_free_device(api.attached_devices(instance_id), instance_id)
