"""
Record Manager - Core logic for DNS record management

This module handles the analysis of changes between current and desired record
sets, ensuring idempotent operations and safe zone management, and turns the
result into a single change batch.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..api.models import Change, ChangeAction, ChangeBatch, RRSet
from ..utils.validators import normalize_name

logger = logging.getLogger(__name__)

# Route53 refuses to delete these at the zone apex
PROTECTED_APEX_TYPES = ("SOA", "NS")


class RecordManager:
    """Manages DNS record set operations and change analysis."""

    def __init__(self, dns_client):
        """Initialize record manager with DNS client."""
        self.dns_client = dns_client

    def analyze_changes(
        self, current_records: List[RRSet], desired_records: List[RRSet], zone: str
    ) -> Dict:
        """
        Analyze changes between current and desired record sets.

        Args:
            current_records: Record sets currently in the zone
            desired_records: Desired record sets, e.g. from CSV
            zone: DNS zone name for safety validation

        Returns:
            Dictionary containing categorized changes
        """
        logger.info("Analyzing DNS record changes...")

        self._validate_zone_safety(current_records, desired_records, zone)

        current_by_key = {self._key(r): r for r in current_records}
        desired_keys = {self._key(r) for r in desired_records}

        creates = []
        updates = []
        deletes = []
        no_changes = []

        for desired in desired_records:
            existing = current_by_key.get(self._key(desired))

            if existing is None:
                creates.append(desired)
                logger.info(f"Create needed: {desired.name} {desired.type} -> {desired.values}")
            elif self._same_content(existing, desired):
                no_changes.append(desired)
                logger.info(f"No change needed: {desired.name} {desired.type}")
            else:
                updates.append(desired)
                logger.info(
                    f"Update needed: {desired.name} {desired.type} {existing.values} -> {desired.values}"
                )

        for current in current_records:
            if not self._is_in_zone(current.name, zone):
                continue
            if self._is_protected(current, zone):
                continue
            if self._key(current) not in desired_keys:
                deletes.append(current)
                logger.info(f"Delete needed: {current.name} {current.type} -> {current.values}")

        total_changes = len(creates) + len(updates) + len(deletes)

        changes = {
            "creates": creates,
            "updates": updates,
            "deletes": deletes,
            "no_changes": no_changes,
            "total_changes": total_changes,
        }

        logger.info(
            f"Change analysis complete: {len(creates)} creates, {len(updates)} updates, "
            f"{len(deletes)} deletes, {len(no_changes)} no changes"
        )

        return changes

    def build_change_batch(self, changes: Dict, comment: str = "") -> ChangeBatch:
        """Turn analyzed changes into one batch: deletes, then creates, then upserts."""
        batch = [Change(ChangeAction.DELETE, r) for r in changes["deletes"]]
        batch += [Change(ChangeAction.CREATE, r) for r in changes["creates"]]
        batch += [Change(ChangeAction.UPSERT, r) for r in changes["updates"]]
        return ChangeBatch(changes=batch, comment=comment)

    def _key(self, rrset: RRSet) -> Tuple[str, str, str]:
        return (normalize_name(rrset.name), rrset.type.upper(), rrset.set_identifier or "")

    def _same_content(self, current: RRSet, desired: RRSet) -> bool:
        """Compare everything but the name, which the key already matched."""
        return (
            current.ttl == desired.ttl
            and current.values == desired.values
            and current.alias_target == desired.alias_target
            and current.weight == desired.weight
            and (current.failover or None) == (desired.failover or None)
            and (current.region or None) == (desired.region or None)
            and (current.health_check_id or None) == (desired.health_check_id or None)
        )

    def _is_in_zone(self, name: str, zone: str) -> bool:
        """Check if a record name is within the specified zone."""
        normalized_name = normalize_name(name)
        normalized_zone = normalize_name(zone)
        return normalized_name == normalized_zone or normalized_name.endswith(
            "." + normalized_zone
        )

    def _is_protected(self, rrset: RRSet, zone: str) -> bool:
        return (
            rrset.type.upper() in PROTECTED_APEX_TYPES
            and normalize_name(rrset.name) == normalize_name(zone)
        )

    def _validate_zone_safety(
        self, current_records: List[RRSet], desired_records: List[RRSet], zone: str
    ):
        """Validate that operations are safe for the specified zone."""
        logger.info(f"Validating zone safety for zone: {zone}")

        for record in desired_records:
            if not self._is_in_zone(record.name, zone):
                raise ValueError(f"Record '{record.name}' is not within zone '{zone}'")

        for record in current_records:
            if not self._is_in_zone(record.name, zone):
                logger.warning(
                    f"Found record outside target zone: {record.name} "
                    f"(zone: {zone}) - will not be modified"
                )

    def find_record(self, records: List[RRSet], name: str, record_type: str) -> Optional[RRSet]:
        """Find a record set by name and type."""
        wanted = (normalize_name(name), record_type.upper())
        for record in records:
            if (normalize_name(record.name), record.type.upper()) == wanted:
                return record
        return None
