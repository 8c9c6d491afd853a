"""
XML Codec - Route53 wire format

Encodes change batches into ChangeResourceRecordSetsRequest documents and
decodes the API's response and error documents into typed objects.

Optional elements are left out while the tree is built, so the output never
contains an empty <AliasTarget></AliasTarget> and only contains
<Weight>0</Weight> when include_weight is set.
"""

import re
import xml.etree.ElementTree as ET
from typing import Callable, Dict, Iterator, Optional, Union

from .errors import CodecError
from .models import (
    AliasTarget,
    ChangeBatch,
    ChangeInfo,
    ErrorResponse,
    HostedZone,
    HostedZoneList,
    ResponseShape,
    RRSet,
    RRSetList,
)

NAMESPACE = "https://route53.amazonaws.com/doc/2012-12-12/"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters outside the XML 1.0 Char production; ElementTree writes them as-is
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _sub(parent: ET.Element, tag: str, text: Optional[str] = None) -> ET.Element:
    if isinstance(text, str):
        bad = _INVALID_XML_CHARS.search(text)
        if bad:
            raise CodecError(
                f"<{tag}> contains a character not allowed in XML: {bad.group()!r}"
            )

    element = ET.SubElement(parent, tag)
    if text is not None:
        element.text = text
    return element


def _encode_rrset(parent: ET.Element, rrset: RRSet, include_weight: bool) -> None:
    _sub(parent, "Name", rrset.name)
    _sub(parent, "Type", rrset.type)

    if rrset.set_identifier:
        _sub(parent, "SetIdentifier", rrset.set_identifier)
    if rrset.weight is not None and (rrset.weight != 0 or include_weight):
        _sub(parent, "Weight", str(rrset.weight))
    if rrset.region:
        _sub(parent, "Region", rrset.region)
    if rrset.failover:
        _sub(parent, "Failover", rrset.failover)

    # Alias record sets take their TTL from the target
    if rrset.alias_target is None:
        _sub(parent, "TTL", str(rrset.ttl))

    if rrset.values:
        records = _sub(parent, "ResourceRecords")
        for value in rrset.values:
            _sub(_sub(records, "ResourceRecord"), "Value", value)

    if rrset.alias_target is not None:
        target = _sub(parent, "AliasTarget")
        _sub(target, "HostedZoneId", rrset.alias_target.hosted_zone_id)
        _sub(target, "DNSName", rrset.alias_target.dns_name)
        _sub(
            target,
            "EvaluateTargetHealth",
            "true" if rrset.alias_target.evaluate_target_health else "false",
        )

    if rrset.health_check_id:
        _sub(parent, "HealthCheckId", rrset.health_check_id)


def encode_change_batch(batch: ChangeBatch, include_weight: bool = False) -> bytes:
    """
    Serialize a change batch to a ChangeResourceRecordSetsRequest document.

    Args:
        batch: The changes to submit
        include_weight: Keep a zero weight instead of dropping it

    Returns:
        UTF-8 document bytes, XML declaration included
    """
    root = ET.Element("ChangeResourceRecordSetsRequest", {"xmlns": NAMESPACE})
    batch_element = _sub(root, "ChangeBatch")
    _sub(batch_element, "Comment", batch.comment)
    changes = _sub(batch_element, "Changes")

    for change in batch.changes:
        change_element = _sub(changes, "Change")
        _sub(change_element, "Action", change.action.value)
        _encode_rrset(
            _sub(change_element, "ResourceRecordSet"), change.rrset, include_weight
        )

    try:
        document = ET.tostring(root, encoding="unicode", short_empty_elements=False)
    except (TypeError, ValueError) as e:
        raise CodecError(f"Cannot encode change batch: {e}") from e
    return (XML_HEADER + document).encode("utf-8")


# Decoding. The API qualifies every element with NAMESPACE; lookups below
# match on the local name only.


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    return (child for child in element if _local(child.tag) == name)


def _find(element: ET.Element, path: str) -> Optional[ET.Element]:
    for name in path.split("/"):
        element = next(_children(element, name), None)
        if element is None:
            return None
    return element


def _text(element: ET.Element, path: str, default: Optional[str] = None) -> Optional[str]:
    found = _find(element, path)
    if found is None:
        return default
    return found.text or ""


def _int(element: ET.Element, path: str, default: int = 0) -> int:
    raw = _text(element, path)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise CodecError(f"<{path}> is not an integer: {raw!r}") from e


def _bool(element: ET.Element, path: str) -> bool:
    return (_text(element, path) or "").strip().lower() == "true"


def _parse(body: Union[bytes, str], expected_root: Optional[str] = None) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise CodecError(f"Malformed XML: {e}") from e

    if expected_root and _local(root.tag) != expected_root:
        raise CodecError(f"Expected <{expected_root}>, got <{_local(root.tag)}>")
    return root


def decode_rrset(element: ET.Element) -> RRSet:
    """Build an RRSet from a ResourceRecordSet element."""
    values = []
    records = _find(element, "ResourceRecords")
    if records is not None:
        for record in _children(records, "ResourceRecord"):
            values.append(_text(record, "Value", ""))

    alias_target = None
    alias = _find(element, "AliasTarget")
    if alias is not None:
        alias_target = AliasTarget(
            hosted_zone_id=_text(alias, "HostedZoneId", ""),
            dns_name=_text(alias, "DNSName", ""),
            evaluate_target_health=_bool(alias, "EvaluateTargetHealth"),
        )

    weight = None
    if _find(element, "Weight") is not None:
        weight = _int(element, "Weight")

    return RRSet(
        name=_text(element, "Name", ""),
        type=_text(element, "Type", ""),
        ttl=_int(element, "TTL"),
        values=values,
        health_check_id=_text(element, "HealthCheckId"),
        set_identifier=_text(element, "SetIdentifier"),
        weight=weight,
        alias_target=alias_target,
        failover=_text(element, "Failover"),
        region=_text(element, "Region"),
    )


def decode_change_info(body: Union[bytes, str]) -> ChangeInfo:
    root = _parse(body, ResponseShape.CHANGE_INFO.value)
    info = _find(root, "ChangeInfo")
    if info is None:
        raise CodecError("Response has no <ChangeInfo>")

    return ChangeInfo(
        id=_text(info, "Id", ""),
        status=_text(info, "Status", ""),
        submitted_at=_text(info, "SubmittedAt", ""),
        comment=_text(info, "Comment"),
    )


def decode_rrset_list(body: Union[bytes, str]) -> RRSetList:
    root = _parse(body, ResponseShape.RRSET_LIST.value)
    rrsets = []
    container = _find(root, "ResourceRecordSets")
    if container is not None:
        rrsets = [decode_rrset(el) for el in _children(container, "ResourceRecordSet")]

    return RRSetList(
        rrsets=rrsets,
        is_truncated=_bool(root, "IsTruncated"),
        max_items=_int(root, "MaxItems"),
        next_record_name=_text(root, "NextRecordName"),
        next_record_type=_text(root, "NextRecordType"),
        next_record_identifier=_text(root, "NextRecordIdentifier"),
    )


def decode_hosted_zone_list(body: Union[bytes, str]) -> HostedZoneList:
    root = _parse(body, ResponseShape.HOSTED_ZONE_LIST.value)
    zones = []
    container = _find(root, "HostedZones")
    if container is not None:
        for zone in _children(container, "HostedZone"):
            zones.append(
                HostedZone(
                    id=_text(zone, "Id", ""),
                    name=_text(zone, "Name", ""),
                    caller_reference=_text(zone, "CallerReference", ""),
                    comment=_text(zone, "Config/Comment"),
                    private_zone=_bool(zone, "Config/PrivateZone"),
                    record_count=_int(zone, "ResourceRecordSetCount"),
                )
            )

    return HostedZoneList(
        hosted_zones=zones,
        is_truncated=_bool(root, "IsTruncated"),
        max_items=_int(root, "MaxItems"),
        marker=_text(root, "Marker"),
        next_marker=_text(root, "NextMarker"),
    )


DECODERS: Dict[ResponseShape, Callable] = {
    ResponseShape.CHANGE_INFO: decode_change_info,
    ResponseShape.RRSET_LIST: decode_rrset_list,
    ResponseShape.HOSTED_ZONE_LIST: decode_hosted_zone_list,
}


def decode_response(shape: ResponseShape, body: Union[bytes, str]):
    """Decode a successful response body into the object for ``shape``."""
    return DECODERS[shape](body)


def decode_error(body: Union[bytes, str]) -> ErrorResponse:
    """
    Decode an ErrorResponse document.

    Raises:
        CodecError: if the body is not XML or carries no <Error><Code>
    """
    root = _parse(body)
    error = _find(root, "Error")
    if error is None or not _text(error, "Code"):
        raise CodecError("Body is not an ErrorResponse document")

    return ErrorResponse(
        type=_text(error, "Type", ""),
        code=_text(error, "Code", ""),
        message=_text(error, "Message", ""),
        request_id=_text(root, "RequestId", ""),
    )
