"""
Validators - Input validation for DNS records

This module provides validation functions for zone names, record names,
record types and values, and the routing policy fields of record sets
to ensure data integrity and safety.
"""

import ipaddress
import logging
import re
from typing import List

import dns.exception
import dns.name
import dns.rdatatype

from ..api.models import RRSet

logger = logging.getLogger(__name__)

MAX_TTL = 2147483647
MAX_WEIGHT = 255
FAILOVER_ROLES = ("PRIMARY", "SECONDARY")


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate Fully Qualified Domain Name (FQDN).

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    # Check for trailing dot (invalid in strict FQDN validation)
    if fqdn.endswith("."):
        logger.warning(f"FQDN ends with dot: {fqdn}")
        return False

    if len(fqdn) > 253:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn.split(".")

    if len(labels) < 2:
        logger.warning(f"FQDN must have at least 2 labels: {fqdn}")
        return False

    if any(label == "" for label in labels):
        logger.warning(f"FQDN contains empty labels: {fqdn}")
        return False

    for i, label in enumerate(labels):
        if not _validate_label(label, i == 0):
            logger.warning(f"Invalid label '{label}' in FQDN: {fqdn}")
            return False

    return True


def _validate_label(label: str, is_first: bool) -> bool:
    """
    Validate a single domain label.

    Args:
        label: The label to validate
        is_first: Whether this is the first label

    Returns:
        True if valid, False otherwise
    """
    if len(label) == 0 or len(label) > 63:
        return False

    # Letters, digits and inner hyphens only
    if not re.match(r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$", label):
        return False

    if "--" in label:
        return False

    # First label cannot start with digit (RFC 1123)
    if is_first and label[0].isdigit():
        return False

    return True


def validate_ipv4(ipv4: str) -> bool:
    """
    Validate IPv4 address.

    Args:
        ipv4: The IPv4 address to validate

    Returns:
        True if valid, False otherwise
    """
    if not ipv4 or not isinstance(ipv4, str):
        return False

    try:
        ipaddress.IPv4Address(ipv4.strip())
        return True
    except ipaddress.AddressValueError:
        logger.warning(f"Invalid IPv4 address: {ipv4}")
        return False


def validate_zone_name(zone: str) -> bool:
    """
    Validate DNS zone name.

    Args:
        zone: The zone name to validate

    Returns:
        True if valid, False otherwise
    """
    if not zone or not isinstance(zone, str):
        return False

    if not validate_fqdn(zone):
        return False

    # Zone names typically don't have IP addresses
    if validate_ipv4(zone):
        return False

    return True


def validate_record_name(name: str) -> bool:
    """
    Validate a record set name.

    Unlike validate_fqdn this accepts wildcards, underscores (SRV, DKIM)
    and an optional trailing dot, as Route53 does.
    """
    if not name or not isinstance(name, str):
        return False

    try:
        parsed = dns.name.from_text(name.strip())
    except dns.exception.DNSException as e:
        logger.warning(f"Invalid record name '{name}': {e}")
        return False

    # from_text makes the name absolute; a bare label plus the root is too short
    if len(parsed.labels) < 3:
        logger.warning(f"Record name must have at least 2 labels: {name}")
        return False

    return True


def validate_record_type(record_type: str) -> bool:
    """Check that a record type mnemonic is known (A, AAAA, CNAME, ...)."""
    if not record_type or not isinstance(record_type, str):
        return False

    try:
        dns.rdatatype.from_text(record_type.strip().upper())
        return True
    except dns.rdatatype.UnknownRdatatype:
        logger.warning(f"Unknown record type: {record_type}")
        return False


def validate_ttl(ttl) -> bool:
    try:
        value = int(ttl)
    except (TypeError, ValueError):
        return False
    return 0 <= value <= MAX_TTL


def normalize_name(name: str) -> str:
    """
    Canonical form of a record name for comparisons.

    Lowercase, no trailing dot, and Route53 octal escapes such as ``\\052``
    (for ``*``) decoded.
    """
    if not name:
        return name

    try:
        text = dns.name.from_text(name.strip()).to_text(omit_final_dot=True)
    except dns.exception.DNSException:
        text = name.strip().rstrip(".")
    return text.lower()


def validate_rrset(rrset: RRSet) -> List[str]:
    """
    Check a record set for problems the API would reject.

    Returns:
        A list of error messages; empty when the record set is valid
    """
    errors = []

    if not validate_record_name(rrset.name):
        errors.append(f"Invalid record name '{rrset.name}'")

    if not validate_record_type(rrset.type):
        errors.append(f"Invalid record type '{rrset.type}'")

    if rrset.alias_target is not None:
        if rrset.values:
            errors.append(f"{rrset.name}: alias record sets cannot carry values")
        if not rrset.alias_target.hosted_zone_id or not rrset.alias_target.dns_name:
            errors.append(f"{rrset.name}: alias target needs a hosted zone id and DNS name")
    else:
        if not rrset.values:
            errors.append(f"{rrset.name}: record set has no values")
        if not validate_ttl(rrset.ttl):
            errors.append(f"{rrset.name}: TTL {rrset.ttl} out of range")

    if rrset.type.upper() == "A":
        for value in rrset.values:
            if not validate_ipv4(value):
                errors.append(f"{rrset.name}: '{value}' is not an IPv4 address")

    policies = [
        label
        for label, value in (
            ("weight", rrset.weight),
            ("failover", rrset.failover),
            ("region", rrset.region),
        )
        if value is not None and value != ""
    ]
    if len(policies) > 1:
        errors.append(f"{rrset.name}: conflicting routing policies {', '.join(policies)}")

    if policies and not rrset.set_identifier:
        errors.append(f"{rrset.name}: {policies[0]} routing requires a set identifier")

    if rrset.weight is not None and not 0 <= rrset.weight <= MAX_WEIGHT:
        errors.append(f"{rrset.name}: weight {rrset.weight} outside 0-{MAX_WEIGHT}")

    if rrset.failover and rrset.failover not in FAILOVER_ROLES:
        errors.append(f"{rrset.name}: failover must be PRIMARY or SECONDARY")

    return errors
