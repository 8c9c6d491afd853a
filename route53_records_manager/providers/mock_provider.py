"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores record sets in memory
for safe testing and demonstration purposes. Change batches are applied
atomically, with the same CREATE/DELETE/UPSERT rules Route53 enforces.
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from ..api.models import Change, ChangeAction, ChangeInfo, RRSet
from ..utils.validators import normalize_name
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)


def _key(rrset: RRSet) -> Tuple[str, str, str]:
    return (normalize_name(rrset.name), rrset.type.upper(), rrset.set_identifier or "")


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self, config: Dict = None):
        """Initialize mock provider."""
        self.zones: Dict[str, List[RRSet]] = {}
        self.batches: List[Tuple[str, List[Change], str]] = []
        logger.info("Mock DNS provider initialized")

    def get_records(self, zone_id: str) -> List[RRSet]:
        """Get all record sets of a zone."""
        records = self.zones.get(zone_id, [])
        logger.info(f"Mock: Retrieved {len(records)} record sets")
        return copy.deepcopy(records)

    def apply_changes(
        self, zone_id: str, changes: List[Change], comment: str = ""
    ) -> ChangeInfo:
        """Apply a list of changes to a zone as one atomic batch."""
        records = copy.deepcopy(self.zones.get(zone_id, []))

        for change in changes:
            key = _key(change.rrset)
            index = next((i for i, r in enumerate(records) if _key(r) == key), None)

            if change.action == ChangeAction.CREATE:
                if index is not None:
                    raise ValueError(f"Record set {change.rrset.name} {change.rrset.type} already exists")
                records.append(copy.deepcopy(change.rrset))
            elif change.action == ChangeAction.UPSERT:
                if index is None:
                    records.append(copy.deepcopy(change.rrset))
                else:
                    records[index] = copy.deepcopy(change.rrset)
            elif change.action == ChangeAction.DELETE:
                if index is None:
                    raise ValueError(f"Record set {change.rrset.name} {change.rrset.type} not found for deletion")
                del records[index]

            logger.info(f"Mock: {change.action.value} {change.rrset.name} {change.rrset.type} {change.rrset.values}")

        self.zones[zone_id] = records
        self.batches.append((zone_id, list(changes), comment))

        return ChangeInfo(
            id=f"/change/{uuid.uuid4().hex[:14].upper()}",
            status="INSYNC",
            submitted_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            comment=comment or None,
        )
