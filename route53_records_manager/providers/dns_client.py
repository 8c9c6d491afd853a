"""
DNS Client - Unified interface for DNS provider APIs

This module provides a common interface for different DNS providers,
currently supporting AWS Route53 and an in-memory mock.
"""

import logging
from typing import Dict, List

from ..api.models import Change, ChangeInfo, RRSet
from .base_provider import DNSProvider
from .mock_provider import MockDNSProvider
from .route53_provider import Route53Provider

logger = logging.getLogger(__name__)


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = self._get_provider()

    def _get_provider(self) -> DNSProvider:
        """Get DNS provider based on configuration."""
        provider_name = self.config.get("default_provider", "route53")
        provider_config = self.config.get("dns_providers", {}).get(provider_name) or {}

        if provider_name == "route53":
            return Route53Provider(provider_config)
        elif provider_name == "mock":
            return MockDNSProvider(provider_config)
        else:
            logger.warning(f"Unknown provider '{provider_name}', using mock provider")
            return MockDNSProvider()

    def get_records(self, zone_id: str) -> List[RRSet]:
        """Get all record sets of a zone."""
        return self.provider.get_records(zone_id)

    def apply_changes(self, zone_id: str, changes: List[Change], comment: str = "") -> ChangeInfo:
        """Apply a list of changes to a zone as one atomic batch."""
        return self.provider.apply_changes(zone_id, changes, comment)
