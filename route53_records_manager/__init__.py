"""
Route53 Records Manager - Automated DNS record set management

A tool for managing Route53 hosted zone record sets from CSV files,
built on a signed XML request pipeline with credential refresh.
"""

__version__ = "1.0.0"
__author__ = "Route53 Records Manager Team"
__description__ = "Automated DNS record set management for Route53 hosted zones"

from .core.dns_manager import DNSManager
from .core.record_manager import RecordManager
from .providers.dns_client import DNSClient

__all__ = [
    "DNSManager",
    "RecordManager",
    "DNSClient",
]
