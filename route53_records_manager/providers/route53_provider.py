"""
Route53 DNS provider implementation.

Typed operations on hosted zones and record sets. Each one builds a Request
and hands it to the RequestExecutor, which signs, encodes, sends and decodes.
"""

import logging
from typing import Dict, List, Optional

from ..api.credentials import CredentialProvider, build_credential_source
from ..api.errors import UnsupportedResultError
from ..api.executor import DEFAULT_API_VERSION, DEFAULT_ENDPOINT, RequestExecutor
from ..api.models import (
    Change,
    ChangeAction,
    ChangeBatch,
    ChangeInfo,
    HostedZone,
    Request,
    ResponseShape,
    RRSet,
)
from ..utils.validators import validate_rrset
from .base_provider import DNSProvider

logger = logging.getLogger(__name__)


def clean_zone_id(zone_id: str) -> str:
    """Accept ids as returned by the API ("/hostedzone/Z123") or bare ("Z123")."""
    return zone_id.strip().rsplit("/", 1)[-1]


class Route53Provider(DNSProvider):
    """Route53 provider backed by the signed XML request pipeline."""

    def __init__(self, config: Dict, executor: Optional[RequestExecutor] = None):
        """Initialize Route53 provider."""
        self.config = config
        self.executor = executor or RequestExecutor(
            CredentialProvider(build_credential_source(config)),
            endpoint=config.get("endpoint", DEFAULT_ENDPOINT),
            api_version=config.get("api_version", DEFAULT_API_VERSION),
            include_weight=config.get("include_weight", False),
            debug=config.get("debug", False),
            timeout=config.get("timeout", 30),
        )

        logger.info(f"Route53 provider initialized for {self.executor.endpoint}")

    def change_rrsets(
        self, zone_id: str, changes: List[Change], comment: str = ""
    ) -> ChangeInfo:
        """
        Submit a change batch to a hosted zone.

        Raises:
            ValueError: if any record set fails validation; nothing is sent
        """
        errors = []
        for change in changes:
            errors.extend(validate_rrset(change.rrset))
        if errors:
            raise ValueError("Invalid change batch: " + "; ".join(errors))

        request = Request(
            method="POST",
            path=f"/hostedzone/{clean_zone_id(zone_id)}/rrset",
            shape=ResponseShape.CHANGE_INFO,
            body=ChangeBatch(changes=list(changes), comment=comment),
        )
        info = self.executor.execute(request)
        logger.info(f"Submitted {len(changes)} changes to {zone_id}: {info.id} {info.status}")
        return info

    def list_rrsets(self, zone_id: str) -> List[RRSet]:
        """
        List the record sets of a hosted zone.

        Raises:
            UnsupportedResultError: if the API paginated the result
        """
        request = Request(
            method="GET",
            path=f"/hostedzone/{clean_zone_id(zone_id)}/rrset",
            shape=ResponseShape.RRSET_LIST,
        )
        result = self.executor.execute(request)
        if result.is_truncated:
            raise UnsupportedResultError(
                f"Cannot handle truncated record set list for zone {zone_id}"
            )

        logger.info(f"Retrieved {len(result.rrsets)} record sets from {zone_id}")
        return result.rrsets

    def list_hosted_zones(self) -> List[HostedZone]:
        """
        List the account's hosted zones.

        Raises:
            UnsupportedResultError: if the API paginated the result
        """
        request = Request(
            method="GET", path="/hostedzone", shape=ResponseShape.HOSTED_ZONE_LIST
        )
        result = self.executor.execute(request)
        if result.is_truncated:
            raise UnsupportedResultError("Cannot handle truncated hosted zone list")
        return result.hosted_zones

    def create_rrset(self, zone_id: str, rrset: RRSet, comment: str = "") -> ChangeInfo:
        return self.change_rrsets(zone_id, [Change(ChangeAction.CREATE, rrset)], comment)

    def delete_rrset(self, zone_id: str, rrset: RRSet, comment: str = "") -> ChangeInfo:
        return self.change_rrsets(zone_id, [Change(ChangeAction.DELETE, rrset)], comment)

    def upsert_rrset(self, zone_id: str, rrset: RRSet, comment: str = "") -> ChangeInfo:
        return self.change_rrsets(zone_id, [Change(ChangeAction.UPSERT, rrset)], comment)

    def get_records(self, zone_id: str) -> List[RRSet]:
        """Get all record sets of a zone."""
        return self.list_rrsets(zone_id)

    def apply_changes(
        self, zone_id: str, changes: List[Change], comment: str = ""
    ) -> ChangeInfo:
        """Apply a list of changes to a zone as one atomic batch."""
        return self.change_rrsets(zone_id, changes, comment)
