"""
DNS provider implementations.

This package contains implementations for the supported DNS providers:
AWS Route53 and an in-memory mock provider.
"""

from .base_provider import DNSProvider
from .dns_client import DNSClient
from .mock_provider import MockDNSProvider
from .route53_provider import Route53Provider

__all__ = ["DNSClient", "DNSProvider", "Route53Provider", "MockDNSProvider"]
