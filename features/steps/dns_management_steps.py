"""
Step definitions for Route53 Records Manager record set management tests.
"""

import csv

from behave import given, then, when

from route53_records_manager.api.models import RRSet
from route53_records_manager.core.dns_manager import DNSManager
from route53_records_manager.parsers.csv import CSVParser


def _write_csv(path, rows):
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["Name", "Type", "TTL", "Value"])
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def _zone_records(context):
    return context.dns_manager.dns_client.get_records(context.test_zone_id)


@given("the Route53 Records Manager is configured with the mock provider")
def step_impl(context):
    """Configure the manager with an in-memory provider."""
    context.dns_manager = DNSManager(str(context.test_config_file))
    context.provider = context.dns_manager.dns_client.provider
    assert context.dns_manager.record_manager is not None


@given("the hosted zone contains its apex SOA and NS records")
def step_impl(context):
    """Seed the zone the way Route53 creates it."""
    apex = context.test_zone + "."
    context.provider.zones[context.test_zone_id] = [
        RRSet(
            name=apex,
            type="SOA",
            ttl=900,
            values=["ns-1.awsdns-01.org. awsdns-hostmaster.amazon.com. 1 7200 900 1209600 86400"],
        ),
        RRSet(name=apex, type="NS", ttl=172800, values=["ns-1.awsdns-01.org.", "ns-2.awsdns-02.net."]),
    ]


@given('the zone contains "{name}" "{record_type}" with values "{values}"')
def step_impl(context, name, record_type, values):
    """Add an existing record set directly to the zone."""
    context.provider.zones[context.test_zone_id].append(
        RRSet(name=name + ".", type=record_type, ttl=300, values=values.split(","))
    )


@given("I have a CSV file with new DNS records")
def step_impl(context):
    """Create a CSV file with new DNS records."""
    context.csv_file = context.test_data_dir / "new_records.csv"
    _write_csv(
        context.csv_file,
        [
            {"Name": "new1.test.bigbank.com", "Type": "A", "TTL": "300", "Value": "192.168.1.200"},
            {"Name": "new2.test.bigbank.com", "Type": "A", "TTL": "300", "Value": "192.168.1.201"},
            {"Name": "www.test.bigbank.com", "Type": "CNAME", "TTL": "60", "Value": "new1.test.bigbank.com"},
        ],
    )


@given("I have a CSV file with the rows")
def step_impl(context):
    """Create a CSV file from the step's table."""
    context.csv_file = context.test_data_dir / f"{context.scenario_name.lower().replace(' ', '_')}.csv"
    _write_csv(context.csv_file, [row.as_dict() for row in context.table])


@when("I process the CSV file")
def step_impl(context):
    """Parse the CSV file and bring the zone in line with it."""
    try:
        records = CSVParser(str(context.csv_file)).parse()
        context.result = context.dns_manager.process_records(
            records, context.test_zone_id, context.test_zone, dry_run=False
        )
    except Exception as e:
        context.error = str(e)
        context.result = False


@when("I run the CSV file in dry run mode")
def step_impl(context):
    """Run the manager in dry run mode."""
    context.output_file = context.test_data_dir / "dry_run.txt"
    context.result = context.dns_manager.process_csv(
        str(context.csv_file),
        context.test_zone_id,
        context.test_zone,
        dry_run=True,
        output_file=str(context.output_file),
    )


@then("the processing should succeed")
def step_impl(context):
    assert context.result is True, f"Processing failed: {context.error}"


@then("the processing should fail")
def step_impl(context):
    assert context.result is False


@then('the zone should contain "{name}" "{record_type}" with values "{values}"')
def step_impl(context, name, record_type, values):
    """Verify a record set and its values, in order."""
    record = context.dns_manager.record_manager.find_record(_zone_records(context), name, record_type)
    assert record is not None, f"{name} {record_type} not found"
    assert record.values == values.split(","), f"Unexpected values {record.values}"


@then('the zone should not contain "{name}" "{record_type}"')
def step_impl(context, name, record_type):
    record = context.dns_manager.record_manager.find_record(_zone_records(context), name, record_type)
    assert record is None, f"{name} {record_type} should not exist"


@then("the apex SOA and NS records should still exist")
def step_impl(context):
    records = _zone_records(context)
    for record_type in ("SOA", "NS"):
        assert context.dns_manager.record_manager.find_record(records, context.test_zone, record_type)


@then("the dry run output should list \"{name}\"")
def step_impl(context, name):
    with open(context.output_file) as f:
        content = f.read()
    assert "DRY RUN SUMMARY" in content
    assert name in content


@then("exactly {count:d} change {noun} should have been submitted")
def step_impl(context, count, noun):
    assert len(context.provider.batches) == count, f"Got {len(context.provider.batches)} batches"
