"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
Records are exchanged as RRSet objects; zones are identified by hosted zone id.
"""

from abc import ABC, abstractmethod
from typing import List

from ..api.models import Change, ChangeAction, ChangeInfo, RRSet


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def get_records(self, zone_id: str) -> List[RRSet]:
        """Get all record sets of a zone."""
        pass

    @abstractmethod
    def apply_changes(
        self, zone_id: str, changes: List[Change], comment: str = ""
    ) -> ChangeInfo:
        """Apply a list of changes to a zone as one atomic batch."""
        pass

    def create_record(self, zone_id: str, rrset: RRSet, comment: str = "") -> ChangeInfo:
        """Create a new record set."""
        return self.apply_changes(zone_id, [Change(ChangeAction.CREATE, rrset)], comment)

    def update_record(self, zone_id: str, rrset: RRSet, comment: str = "") -> ChangeInfo:
        """Create or replace a record set."""
        return self.apply_changes(zone_id, [Change(ChangeAction.UPSERT, rrset)], comment)

    def delete_record(self, zone_id: str, rrset: RRSet, comment: str = "") -> ChangeInfo:
        """Delete a record set; it must match the existing one exactly."""
        return self.apply_changes(zone_id, [Change(ChangeAction.DELETE, rrset)], comment)
