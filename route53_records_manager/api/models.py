"""
Data model for the Route53 request pipeline.

Record sets, changes and change batches are built by callers for a single
call. Response objects mirror the XML documents the API returns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ChangeAction(str, Enum):
    CREATE = "CREATE"
    DELETE = "DELETE"
    UPSERT = "UPSERT"


@dataclass(frozen=True)
class AliasTarget:
    """Points a record set at another AWS resource instead of literal values."""

    hosted_zone_id: str
    dns_name: str
    evaluate_target_health: bool = False


@dataclass
class RRSet:
    """
    A resource record set.

    ``values`` keeps the caller's order and may contain repeats; it is sent
    on the wire exactly as given. Routing policy fields (weight, alias
    target, failover, region) are not checked for mutual exclusion here;
    see ``utils.validators.validate_rrset``.
    """

    name: str
    type: str
    ttl: int = 300
    values: List[str] = field(default_factory=list)
    health_check_id: Optional[str] = None
    set_identifier: Optional[str] = None
    weight: Optional[int] = None
    alias_target: Optional[AliasTarget] = None
    failover: Optional[str] = None
    region: Optional[str] = None


@dataclass(frozen=True)
class Change:
    action: ChangeAction
    rrset: RRSet


@dataclass(frozen=True)
class ChangeBatch:
    """Ordered changes submitted atomically to one hosted zone."""

    changes: List[Change]
    comment: str = ""


@dataclass(frozen=True)
class ChangeInfo:
    id: str
    status: str
    submitted_at: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class HostedZone:
    id: str
    name: str
    caller_reference: str = ""
    comment: Optional[str] = None
    private_zone: bool = False
    record_count: int = 0


@dataclass(frozen=True)
class RRSetList:
    rrsets: List[RRSet]
    is_truncated: bool = False
    max_items: int = 0
    next_record_name: Optional[str] = None
    next_record_type: Optional[str] = None
    next_record_identifier: Optional[str] = None


@dataclass(frozen=True)
class HostedZoneList:
    hosted_zones: List[HostedZone]
    is_truncated: bool = False
    max_items: int = 0
    marker: Optional[str] = None
    next_marker: Optional[str] = None


@dataclass(frozen=True)
class ErrorResponse:
    type: str
    code: str
    message: str
    request_id: str = ""


class ResponseShape(str, Enum):
    """Which document a request expects back on success."""

    CHANGE_INFO = "ChangeResourceRecordSetsResponse"
    RRSET_LIST = "ListResourceRecordSetsResponse"
    HOSTED_ZONE_LIST = "ListHostedZonesResponse"


@dataclass(frozen=True)
class Request:
    """
    One API call, built by the domain layer and handed to the executor.

    ``path`` is relative to the versioned base path, e.g.
    ``/hostedzone/Z123/rrset``.
    """

    method: str
    path: str
    shape: ResponseShape
    params: Optional[Dict[str, str]] = None
    body: Optional[ChangeBatch] = None
