#!/usr/bin/env python3
"""
Test suite for Route53 Records Manager

This module provides testing for validation, providers, change analysis,
CSV parsing and the manager that ties them together.
"""

import csv
import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import Mock, patch

import yaml

from route53_records_manager.api.executor import TRACE_LOGGER
from route53_records_manager.api.models import (
    AliasTarget,
    Change,
    ChangeAction,
    RRSet,
)
from route53_records_manager.cli.main import main
from route53_records_manager.core.dns_manager import DNSManager
from route53_records_manager.core.record_manager import RecordManager
from route53_records_manager.parsers.csv import CSVParser
from route53_records_manager.providers.dns_client import DNSClient
from route53_records_manager.providers.mock_provider import MockDNSProvider
from route53_records_manager.providers.route53_provider import Route53Provider
from route53_records_manager.utils.config import (
    config_logger,
    get_default_config,
    load_config,
    provider_config,
)
from route53_records_manager.utils.validators import (
    normalize_name,
    validate_fqdn,
    validate_ipv4,
    validate_record_name,
    validate_record_type,
    validate_rrset,
    validate_ttl,
)

MOCK_CONFIG = {"dns_providers": {"mock": {}}, "default_provider": "mock"}


def a_record(name, *values, ttl=300):
    return RRSet(name=name, type="A", ttl=ttl, values=list(values))


class TestValidators(unittest.TestCase):
    """Test the validation functions."""

    def test_validate_fqdn_valid(self):
        """Test valid FQDN validation."""
        valid_fqdns = [
            "example.com",
            "sub.example.com",
            "machine1.mgmt.ib.bigbank.com",
        ]

        for fqdn in valid_fqdns:
            with self.subTest(fqdn=fqdn):
                self.assertTrue(validate_fqdn(fqdn))

    def test_validate_fqdn_invalid(self):
        """Test invalid FQDN validation."""
        invalid_fqdns = [
            "",  # Empty
            "single",  # Single label
            "example.com.",  # Ends with dot
            "example..com",  # Consecutive dots
            "-example.com",  # Starts with hyphen
            "a" * 64 + ".com",  # Label too long
        ]

        for fqdn in invalid_fqdns:
            with self.subTest(fqdn=fqdn):
                self.assertFalse(validate_fqdn(fqdn))

    def test_validate_ipv4(self):
        """Test IPv4 validation."""
        for ip in ("192.168.1.1", "0.0.0.0", "255.255.255.255"):
            with self.subTest(ip=ip):
                self.assertTrue(validate_ipv4(ip))

        for ip in ("", "256.1.2.3", "1.2.3", "1.2.3.abc", "192.168.1."):
            with self.subTest(ip=ip):
                self.assertFalse(validate_ipv4(ip))

    def test_validate_record_name(self):
        """Test record names, which allow wildcards and underscores."""
        for name in ("www.example.com", "www.example.com.", "*.example.com", "_sip._tcp.example.com"):
            with self.subTest(name=name):
                self.assertTrue(validate_record_name(name))

        for name in ("", "single", "example..com"):
            with self.subTest(name=name):
                self.assertFalse(validate_record_name(name))

    def test_validate_record_type(self):
        """Test record type mnemonics."""
        for record_type in ("A", "aaaa", "CNAME", "TXT", "SRV"):
            with self.subTest(record_type=record_type):
                self.assertTrue(validate_record_type(record_type))

        self.assertFalse(validate_record_type("BOGUS"))
        self.assertFalse(validate_record_type(""))

    def test_validate_ttl(self):
        """Test TTL bounds."""
        self.assertTrue(validate_ttl(0))
        self.assertTrue(validate_ttl("300"))
        self.assertFalse(validate_ttl(-1))
        self.assertFalse(validate_ttl(2147483648))
        self.assertFalse(validate_ttl("soon"))

    def test_normalize_name(self):
        """Test canonical names for comparison."""
        self.assertEqual(normalize_name("WWW.Example.COM."), "www.example.com")
        self.assertEqual(normalize_name("\\052.example.com."), "*.example.com")

    def test_validate_rrset(self):
        """Test record set level checks."""
        self.assertEqual(validate_rrset(a_record("www.example.com", "192.0.2.1")), [])

        alias = RRSet(
            name="example.com.",
            type="A",
            alias_target=AliasTarget("Z2FDTNDATAQYW2", "d111.cloudfront.net."),
        )
        self.assertEqual(validate_rrset(alias), [])

        invalid = [
            (a_record("www.example.com"), "no values"),
            (a_record("www.example.com", "not-an-ip"), "not an IPv4"),
            (a_record("www.example.com", "192.0.2.1", ttl=-5), "TTL"),
            (
                RRSet(name="www.example.com", type="A", values=["192.0.2.1"], weight=10),
                "set identifier",
            ),
            (
                RRSet(
                    name="www.example.com", type="A", values=["192.0.2.1"],
                    set_identifier="a", weight=300,
                ),
                "weight 300",
            ),
            (
                RRSet(
                    name="www.example.com", type="A", values=["192.0.2.1"],
                    set_identifier="a", failover="TERTIARY",
                ),
                "PRIMARY or SECONDARY",
            ),
            (
                RRSet(
                    name="www.example.com", type="A", values=["192.0.2.1"],
                    set_identifier="a", weight=1, region="us-east-1",
                ),
                "conflicting",
            ),
            (
                RRSet(
                    name="example.com.", type="A", values=["192.0.2.1"],
                    alias_target=AliasTarget("Z2FDTNDATAQYW2", "d111.cloudfront.net."),
                ),
                "alias",
            ),
        ]

        for rrset, message in invalid:
            with self.subTest(message=message):
                errors = validate_rrset(rrset)
                self.assertTrue(any(message in e for e in errors), errors)


class TestMockDNSProvider(unittest.TestCase):
    """Test the mock DNS provider."""

    def setUp(self):
        """Set up test fixtures."""
        self.provider = MockDNSProvider()

    def test_create_record(self):
        """Test record creation."""
        info = self.provider.create_record("Z1", a_record("test.example.com", "192.168.1.1"))

        self.assertTrue(info.id.startswith("/change/"))
        self.assertEqual(info.status, "INSYNC")
        self.assertEqual(len(self.provider.zones["Z1"]), 1)

    def test_create_existing_record_fails(self):
        """Test that CREATE does not overwrite."""
        self.provider.create_record("Z1", a_record("test.example.com", "192.168.1.1"))

        with self.assertRaises(ValueError):
            self.provider.create_record("Z1", a_record("TEST.example.com.", "192.168.1.2"))

    def test_update_record(self):
        """Test record update through UPSERT."""
        self.provider.create_record("Z1", a_record("test.example.com", "192.168.1.1"))
        self.provider.update_record("Z1", a_record("test.example.com", "192.168.1.2"))

        records = self.provider.get_records("Z1")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].values, ["192.168.1.2"])

    def test_delete_record(self):
        """Test record deletion."""
        record = a_record("test.example.com", "192.168.1.1")
        self.provider.create_record("Z1", record)

        self.provider.delete_record("Z1", record)

        self.assertEqual(self.provider.get_records("Z1"), [])
        with self.assertRaises(ValueError):
            self.provider.delete_record("Z1", record)

    def test_batch_is_atomic(self):
        """Test that a failing change leaves the zone untouched."""
        self.provider.create_record("Z1", a_record("keep.example.com", "192.168.1.1"))

        with self.assertRaises(ValueError):
            self.provider.apply_changes(
                "Z1",
                [
                    Change(ChangeAction.CREATE, a_record("new.example.com", "192.168.1.2")),
                    Change(ChangeAction.DELETE, a_record("missing.example.com", "192.168.1.3")),
                ],
            )

        self.assertEqual([r.name for r in self.provider.get_records("Z1")], ["keep.example.com"])
        self.assertEqual(len(self.provider.batches), 1)

    def test_weighted_records_are_distinct(self):
        """Test that set identifiers separate record sets with the same name."""
        for identifier in ("blue", "green"):
            self.provider.create_record(
                "Z1",
                RRSet(
                    name="www.example.com", type="A", values=["192.0.2.1"],
                    set_identifier=identifier, weight=50,
                ),
            )

        self.assertEqual(len(self.provider.get_records("Z1")), 2)

    def test_get_records_returns_copies(self):
        """Test that callers cannot mutate stored records."""
        self.provider.create_record("Z1", a_record("test.example.com", "192.168.1.1"))

        self.provider.get_records("Z1")[0].values.append("10.0.0.1")

        self.assertEqual(self.provider.get_records("Z1")[0].values, ["192.168.1.1"])


class TestDNSClient(unittest.TestCase):
    """Test provider selection."""

    def test_mock_provider(self):
        client = DNSClient(MOCK_CONFIG)
        self.assertIsInstance(client.provider, MockDNSProvider)

    def test_unknown_provider_falls_back_to_mock(self):
        client = DNSClient({"default_provider": "bind"})
        self.assertIsInstance(client.provider, MockDNSProvider)

    def test_reads_and_batches_go_through_provider(self):
        """Test that the client only reads records and applies batches."""
        client = DNSClient(MOCK_CONFIG)
        changes = [
            Change(ChangeAction.CREATE, a_record("www.example.com", "192.168.1.1")),
            Change(ChangeAction.CREATE, a_record("api.example.com", "192.168.1.2")),
        ]

        info = client.apply_changes("Z1", changes, "two records")

        self.assertEqual(info.comment, "two records")
        names = sorted(r.name for r in client.get_records("Z1"))
        self.assertEqual(names, ["api.example.com", "www.example.com"])
        for name in ("create_record", "update_record", "delete_record"):
            self.assertFalse(hasattr(client, name))

    def test_route53_provider_settings(self):
        """Test that provider settings reach the executor."""
        config = {
            "default_provider": "route53",
            "dns_providers": {
                "route53": {
                    "endpoint": "http://localhost:4566",
                    "include_weight": True,
                    "timeout": 5,
                }
            },
        }

        client = DNSClient(config)

        self.assertIsInstance(client.provider, Route53Provider)
        executor = client.provider.executor
        self.assertEqual(executor.endpoint, "http://localhost:4566")
        self.assertTrue(executor.include_weight)
        self.assertEqual(executor.timeout, 5)


class TestRecordManager(unittest.TestCase):
    """Test the record manager."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_dns_client = Mock()
        self.record_manager = RecordManager(self.mock_dns_client)

    def test_analyze_changes_create(self):
        """Test analyzing changes for record creation."""
        changes = self.record_manager.analyze_changes(
            [], [a_record("test.example.com", "192.168.1.1")], "example.com"
        )

        self.assertEqual(len(changes["creates"]), 1)
        self.assertEqual(len(changes["updates"]), 0)
        self.assertEqual(len(changes["deletes"]), 0)
        self.assertEqual(changes["total_changes"], 1)

    def test_analyze_changes_update(self):
        """Test analyzing changes for record update."""
        changes = self.record_manager.analyze_changes(
            [a_record("test.example.com.", "192.168.1.1")],
            [a_record("test.example.com", "192.168.1.2")],
            "example.com",
        )

        self.assertEqual(len(changes["creates"]), 0)
        self.assertEqual(len(changes["updates"]), 1)
        self.assertEqual(len(changes["deletes"]), 0)
        self.assertEqual(changes["total_changes"], 1)

    def test_ttl_change_is_update(self):
        """Test that a TTL difference alone triggers an update."""
        changes = self.record_manager.analyze_changes(
            [a_record("test.example.com.", "192.168.1.1", ttl=60)],
            [a_record("test.example.com", "192.168.1.1", ttl=300)],
            "example.com",
        )

        self.assertEqual(len(changes["updates"]), 1)

    def test_analyze_changes_delete(self):
        """Test analyzing changes for record deletion."""
        changes = self.record_manager.analyze_changes(
            [a_record("test.example.com.", "192.168.1.1")], [], "example.com"
        )

        self.assertEqual(len(changes["deletes"]), 1)
        self.assertEqual(changes["total_changes"], 1)

    def test_analyze_changes_no_change(self):
        """Test analyzing changes when no changes are needed."""
        changes = self.record_manager.analyze_changes(
            [a_record("TEST.example.com.", "192.168.1.1")],
            [a_record("test.example.com", "192.168.1.1")],
            "example.com",
        )

        self.assertEqual(len(changes["no_changes"]), 1)
        self.assertEqual(changes["total_changes"], 0)

    def test_apex_records_are_protected(self):
        """Test that the zone's own SOA and NS are never deleted."""
        current = [
            RRSet(name="example.com.", type="SOA", ttl=900, values=["ns-1.awsdns-01.org. admin. 1 7200 900 1209600 86400"]),
            RRSet(name="example.com.", type="NS", ttl=172800, values=["ns-1.awsdns-01.org."]),
            RRSet(name="sub.example.com.", type="NS", ttl=300, values=["ns.other.net."]),
        ]

        changes = self.record_manager.analyze_changes(current, [], "example.com")

        self.assertEqual([(r.name, r.type) for r in changes["deletes"]], [("sub.example.com.", "NS")])

    def test_zone_safety_validation(self):
        """Test zone safety validation."""
        current_records = [a_record("test.example.com.", "192.168.1.1")]
        desired_records = [a_record("test.example.com", "192.168.1.2")]

        self.record_manager.analyze_changes(current_records, desired_records, "example.com")

        with self.assertRaises(ValueError):
            self.record_manager.analyze_changes(current_records, desired_records, "different.com")

        # a shared suffix is not containment
        with self.assertRaises(ValueError):
            self.record_manager.analyze_changes(
                [], [a_record("www.badexample.com", "192.168.1.2")], "example.com"
            )

    def test_records_outside_zone_untouched(self):
        """Test that foreign records in the listing are not deleted."""
        changes = self.record_manager.analyze_changes(
            [a_record("other.net.", "192.168.1.9")], [], "example.com"
        )

        self.assertEqual(changes["deletes"], [])

    def test_build_change_batch_order(self):
        """Test deletes, then creates, then upserts."""
        changes = self.record_manager.analyze_changes(
            [a_record("old.example.com.", "192.0.2.1"), a_record("www.example.com.", "192.0.2.2")],
            [a_record("www.example.com", "192.0.2.3"), a_record("new.example.com", "192.0.2.4")],
            "example.com",
        )

        batch = self.record_manager.build_change_batch(changes, "sync")

        self.assertEqual(
            [(c.action, c.rrset.name) for c in batch.changes],
            [
                (ChangeAction.DELETE, "old.example.com."),
                (ChangeAction.CREATE, "new.example.com"),
                (ChangeAction.UPSERT, "www.example.com"),
            ],
        )
        self.assertEqual(batch.comment, "sync")

    def test_find_record(self):
        """Test lookup by name and type."""
        records = [a_record("www.example.com.", "192.0.2.1")]

        self.assertIs(self.record_manager.find_record(records, "WWW.example.com", "a"), records[0])
        self.assertIsNone(self.record_manager.find_record(records, "www.example.com", "AAAA"))


class TestCSVParser(unittest.TestCase):
    """Test reading desired record sets from CSV."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def _write(self, rows):
        path = os.path.join(self.temp_dir, "records.csv")
        with open(path, "w", newline="") as f:
            csv.writer(f).writerows(rows)
        return path

    def test_rows_merge_into_record_sets(self):
        """Test that rows with the same name and type share a record set."""
        path = self._write(
            [
                ["Name", "Type", "TTL", "Value"],
                ["www.example.com", "A", "60", "192.0.2.2"],
                ["mail.example.com", "MX", "", "10 mx1.example.com"],
                ["WWW.example.com.", "a", "60", "192.0.2.1"],
            ]
        )

        records = CSVParser(path).parse()

        self.assertEqual(len(records), 2)
        www = records[0]
        self.assertEqual(www.type, "A")
        self.assertEqual(www.ttl, 60)
        self.assertEqual(www.values, ["192.0.2.2", "192.0.2.1"])
        self.assertEqual(records[1].ttl, 300)

    def test_invalid_rows_skipped(self):
        """Test that bad rows are dropped and the rest kept."""
        path = self._write(
            [
                ["Name", "Type", "Value"],
                ["www.example.com", "A", "999.1.1.1"],
                ["single", "A", "192.0.2.1"],
                ["api.example.com", "BOGUS", "x"],
                ["api.example.com", "CNAME", ""],
                ["ok.example.com", "A", "192.0.2.1"],
            ]
        )

        records = CSVParser(path).parse()

        self.assertEqual([r.name for r in records], ["ok.example.com"])

    def test_missing_columns(self):
        """Test that required headers are enforced."""
        path = self._write([["FQDN", "IPv4"], ["www.example.com", "192.0.2.1"]])

        with self.assertRaises(Exception) as ctx:
            CSVParser(path).parse()

        self.assertIn("Error parsing CSV", str(ctx.exception))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            CSVParser(os.path.join(self.temp_dir, "absent.csv")).parse()


class TestConfig(unittest.TestCase):
    """Test configuration loading."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def test_missing_file_uses_defaults(self):
        config = load_config(os.path.join(self.temp_dir, "absent.yaml"))
        self.assertEqual(config, get_default_config())

    def test_invalid_yaml_raises(self):
        path = os.path.join(self.temp_dir, "bad.yaml")
        with open(path, "w") as f:
            f.write("dns_providers: [unclosed\n")

        with self.assertRaises(yaml.YAMLError):
            load_config(path)

    def test_provider_config(self):
        config = {
            "default_provider": "route53",
            "dns_providers": {"route53": {"debug": True}, "mock": {}},
        }
        self.assertEqual(provider_config(config), {"debug": True})
        self.assertEqual(provider_config({"default_provider": "mock"}), {})

    def test_debug_enables_trace_logger(self):
        """Test that debug mode routes the trace logger to stderr."""
        trace = logging.getLogger(TRACE_LOGGER)
        before = list(trace.handlers)
        config = {"default_provider": "route53", "dns_providers": {"route53": {"debug": True}}}

        try:
            with patch("logging.basicConfig"):
                config_logger(config)

            self.assertEqual(trace.level, logging.DEBUG)
            self.assertFalse(trace.propagate)
            self.assertEqual(len(trace.handlers), len(before) + 1)
        finally:
            trace.handlers = before
            trace.setLevel(logging.NOTSET)
            trace.propagate = True


class TestDNSManager(unittest.TestCase):
    """Test the main DNS manager."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, "test_config.yaml")
        self.csv_file = os.path.join(self.temp_dir, "test_records.csv")

        with open(self.config_file, "w") as f:
            yaml.dump(MOCK_CONFIG, f)

        with open(self.csv_file, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["Name", "Type", "TTL", "Value"])
            writer.writerow(["test.example.com", "A", "300", "192.168.1.1"])
            writer.writerow(["test.example.com", "A", "300", "192.168.1.2"])

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def test_dns_manager_initialization(self):
        """Test DNS manager initialization."""
        dns_manager = DNSManager(self.config_file)
        self.assertIsInstance(dns_manager.dns_client.provider, MockDNSProvider)
        self.assertIsNotNone(dns_manager.record_manager)

    def test_dry_run(self):
        """Test that a dry run writes the plan and changes nothing."""
        dns_manager = DNSManager(self.config_file)
        output_file = os.path.join(self.temp_dir, "plan.txt")

        result = dns_manager.process_csv(
            self.csv_file, "Z1", "example.com", dry_run=True, output_file=output_file
        )

        self.assertTrue(result)
        self.assertEqual(dns_manager.dns_client.get_records("Z1"), [])
        with open(output_file) as f:
            plan = f.read()
        self.assertIn("RECORD SETS TO CREATE:", plan)
        self.assertIn("+ test.example.com", plan)

    def test_apply_and_idempotency(self):
        """Test applying a CSV, then applying it again."""
        dns_manager = DNSManager(self.config_file)
        provider = dns_manager.dns_client.provider

        self.assertTrue(dns_manager.process_csv(self.csv_file, "Z1", "example.com"))
        records = provider.get_records("Z1")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].values, ["192.168.1.1", "192.168.1.2"])
        self.assertEqual(len(provider.batches), 1)

        self.assertTrue(dns_manager.process_csv(self.csv_file, "Z1", "example.com"))
        self.assertEqual(len(provider.batches), 1)

    def test_all_changes_in_one_batch(self):
        """Test that creates, updates and deletes are submitted together."""
        dns_manager = DNSManager(MOCK_CONFIG)
        provider = dns_manager.dns_client.provider
        provider.zones["Z1"] = [
            a_record("old.example.com.", "192.0.2.1"),
            a_record("www.example.com.", "192.0.2.2"),
        ]

        result = dns_manager.process_records(
            [a_record("www.example.com", "192.0.2.3"), a_record("new.example.com", "192.0.2.4")],
            "Z1",
            "example.com",
            comment="sync",
        )

        self.assertTrue(result)
        self.assertEqual(len(provider.batches), 1)
        zone_id, changes, comment = provider.batches[0]
        self.assertEqual(comment, "sync")
        self.assertEqual(
            [c.action for c in changes],
            [ChangeAction.DELETE, ChangeAction.CREATE, ChangeAction.UPSERT],
        )

    def test_apply_failure_returns_false(self):
        """Test that a rejected batch is reported as failure."""
        dns_manager = DNSManager(MOCK_CONFIG)
        dns_manager.dns_client.provider.apply_changes = Mock(side_effect=ValueError("rejected"))

        self.assertFalse(dns_manager.process_csv(self.csv_file, "Z1", "example.com"))

    def test_invalid_csv_handling(self):
        """Test handling of invalid CSV files."""
        dns_manager = DNSManager(self.config_file)

        invalid_csv = os.path.join(self.temp_dir, "invalid.csv")
        with open(invalid_csv, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["Name"])
            writer.writerow(["test.example.com"])

        self.assertFalse(dns_manager.process_csv(invalid_csv, "Z1", "example.com"))

    def test_records_outside_zone_rejected(self):
        """Test that a CSV naming another zone fails before anything is sent."""
        dns_manager = DNSManager(self.config_file)

        self.assertFalse(dns_manager.process_csv(self.csv_file, "Z1", "other.com"))
        self.assertEqual(dns_manager.dns_client.provider.batches, [])

    def test_list_records(self):
        dns_manager = DNSManager(MOCK_CONFIG)
        dns_manager.dns_client.provider.zones["Z1"] = [a_record("www.example.com.", "192.0.2.1")]

        records = dns_manager.list_records("Z1")

        self.assertEqual(len(records), 1)

    def test_list_zones_without_support(self):
        """Test that the mock provider has no hosted zone listing."""
        self.assertEqual(DNSManager(MOCK_CONFIG).list_zones(), [])


class TestCLI(unittest.TestCase):
    """Test argument handling of the command line entry point."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, "config.yaml")
        with open(self.config_file, "w") as f:
            yaml.dump(MOCK_CONFIG, f)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def _exit_code(self, argv):
        with patch("route53_records_manager.cli.main.config_logger"):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code

    def test_zone_id_required(self):
        self.assertEqual(self._exit_code(["--config", self.config_file, "--list"]), 1)

    def test_output_file_requires_dry_run(self):
        argv = ["--config", self.config_file, "--zone-id", "Z1", "--list", "-o", "plan.txt"]
        self.assertEqual(self._exit_code(argv), 1)

    def test_csv_requires_zone(self):
        argv = ["--config", self.config_file, "--zone-id", "Z1", "--csv", "records.csv"]
        self.assertEqual(self._exit_code(argv), 1)

    def test_missing_config(self):
        argv = ["--config", os.path.join(self.temp_dir, "absent.yaml"), "--zone-id", "Z1", "--list"]
        self.assertEqual(self._exit_code(argv), 1)

    def test_list(self):
        argv = ["--config", self.config_file, "--zone-id", "Z1", "--list"]
        self.assertEqual(self._exit_code(argv), 0)

    def test_apply_csv(self):
        csv_file = os.path.join(self.temp_dir, "records.csv")
        with open(csv_file, "w", newline="") as f:
            csv.writer(f).writerows([["Name", "Type", "Value"], ["www.example.com", "A", "192.0.2.1"]])

        argv = ["--config", self.config_file, "--zone-id", "Z1", "--zone", "example.com", "--csv", csv_file]
        self.assertEqual(self._exit_code(argv), 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
