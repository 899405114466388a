"""
EBSUtilX configuration

Tunables for the volume manager, read from ``EBSUTIL_*`` environment
variables when built with ``ManagerConfig.from_env()``.
"""

import os
from typing import Dict, Mapping, Optional

__all__ = [
    'ManagerConfig',
    'DEFAULT_METADATA_URL',
]

DEFAULT_METADATA_URL = "http://169.254.169.254/latest"
ENV_PREFIX = "EBSUTIL_"

def _parse_float(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    value = env.get(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {value!r}")

def _parse_tags(value: Optional[str]) -> Dict[str, str]:
    """Parse ``key=value,key=value`` into a dictionary."""
    tags = {}
    if not value:
        return tags
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" not in item:
            raise ValueError(f"{ENV_PREFIX}TAGS entries must be key=value, got {item!r}")
        key, tag_value = item.split("=", 1)
        tags[key.strip()] = tag_value.strip()
    return tags

class ManagerConfig:
    """Settings for the volume manager and its collaborators."""

    def __init__(self, poll_interval: float = 1.0, poll_timeout: Optional[float] = None,
                 sysfs_block_path: str = "/sys/block",
                 metadata_url: str = DEFAULT_METADATA_URL,
                 metadata_timeout: float = 2.0, log_level: str = "INFO",
                 tags: Optional[Dict[str, str]] = None):
        if poll_interval < 0:
            raise ValueError("poll_interval must not be negative")
        if poll_timeout is not None and poll_timeout <= 0:
            raise ValueError("poll_timeout must be positive")
        self.poll_interval = poll_interval
        self.poll_timeout = poll_timeout
        self.sysfs_block_path = sysfs_block_path
        self.metadata_url = metadata_url.rstrip("/")
        self.metadata_timeout = metadata_timeout
        self.log_level = log_level
        self.tags = dict(tags or {})

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ManagerConfig":
        """
        Build a configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            ManagerConfig: The configuration, with defaults for unset variables
        """
        if env is None:
            env = os.environ
        return cls(
            poll_interval=_parse_float(env, "POLL_INTERVAL", 1.0),
            poll_timeout=_parse_float(env, "POLL_TIMEOUT", None),
            sysfs_block_path=env.get(ENV_PREFIX + "SYSFS_BLOCK_PATH", "/sys/block"),
            metadata_url=env.get(ENV_PREFIX + "METADATA_URL", DEFAULT_METADATA_URL),
            metadata_timeout=_parse_float(env, "METADATA_TIMEOUT", 2.0),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", "INFO"),
            tags=_parse_tags(env.get(ENV_PREFIX + "TAGS")),
        )

    def __repr__(self) -> str:
        return (f"ManagerConfig(poll_interval={self.poll_interval}, "
                f"poll_timeout={self.poll_timeout}, "
                f"sysfs_block_path={self.sysfs_block_path!r}, "
                f"metadata_url={self.metadata_url!r})")
