"""
Utility functions and helpers.

This package contains utility functions for validation,
configuration, and other common operations.
"""

from .config import config_logger, get_default_config, load_config
from .validators import (
    normalize_name,
    validate_fqdn,
    validate_ipv4,
    validate_record_name,
    validate_record_type,
    validate_rrset,
    validate_zone_name,
)

__all__ = [
    "config_logger",
    "get_default_config",
    "load_config",
    "normalize_name",
    "validate_fqdn",
    "validate_ipv4",
    "validate_record_name",
    "validate_record_type",
    "validate_rrset",
    "validate_zone_name",
]
