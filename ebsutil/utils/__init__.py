"""
Utility functions shared by the EBS volume components.
"""

from .errors import normalize_error, aws_errors
from .polling import StatePoller
from .tags import get_default_tags, merge_tags, tag_specifications
from .logging_config import setup_logging

__all__ = [
    'normalize_error',
    'aws_errors',
    'StatePoller',
    'get_default_tags',
    'merge_tags',
    'tag_specifications',
    'setup_logging',
]
