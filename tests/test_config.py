import pytest
from ebsutil.config import DEFAULT_METADATA_URL, ManagerConfig

def test_defaults():
    """Test the default configuration."""
    config = ManagerConfig.from_env({})

    assert config.poll_interval == 1.0
    assert config.poll_timeout is None
    assert config.sysfs_block_path == "/sys/block"
    assert config.metadata_url == DEFAULT_METADATA_URL
    assert config.metadata_timeout == 2.0
    assert config.log_level == "INFO"
    assert config.tags == {}

def test_from_env():
    """Test reading every setting from the environment."""
    env = {
        "EBSUTIL_POLL_INTERVAL": "0.5",
        "EBSUTIL_POLL_TIMEOUT": "300",
        "EBSUTIL_SYSFS_BLOCK_PATH": "/tmp/sys/block",
        "EBSUTIL_METADATA_URL": "http://localhost:1338/latest/",
        "EBSUTIL_METADATA_TIMEOUT": "5",
        "EBSUTIL_LOG_LEVEL": "DEBUG",
        "EBSUTIL_TAGS": "Team=storage, Env=dev",
    }

    config = ManagerConfig.from_env(env)

    assert config.poll_interval == 0.5
    assert config.poll_timeout == 300.0
    assert config.sysfs_block_path == "/tmp/sys/block"
    assert config.metadata_url == "http://localhost:1338/latest"
    assert config.metadata_timeout == 5.0
    assert config.log_level == "DEBUG"
    assert config.tags == {"Team": "storage", "Env": "dev"}

def test_empty_timeout_means_unbounded():
    """Test that an empty timeout variable keeps polling unbounded."""
    config = ManagerConfig.from_env({"EBSUTIL_POLL_TIMEOUT": ""})

    assert config.poll_timeout is None

def test_malformed_number():
    """Test that a malformed number names the variable."""
    with pytest.raises(ValueError, match="EBSUTIL_POLL_INTERVAL"):
        ManagerConfig.from_env({"EBSUTIL_POLL_INTERVAL": "fast"})

def test_malformed_tags():
    """Test that tags without a value are rejected."""
    with pytest.raises(ValueError, match="EBSUTIL_TAGS"):
        ManagerConfig.from_env({"EBSUTIL_TAGS": "Team"})

def test_invalid_timeout():
    """Test that a non-positive timeout is rejected."""
    with pytest.raises(ValueError):
        ManagerConfig(poll_timeout=0)
