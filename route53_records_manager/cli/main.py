#!/usr/bin/env python3
"""
Route53 Records Manager - Command Line Interface

Main entry point for the Route53 Records Manager CLI.
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from ..core.dns_manager import DNSManager
from ..utils.config import config_logger, load_config
from ..utils.validators import validate_zone_name

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Route53 Records Manager - Automated DNS record set management"
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )

    parser.add_argument("--zone-id", "-i", help="Hosted zone id to manage")

    parser.add_argument(
        "--zone", "-z", help="DNS zone name, used to keep changes inside the zone"
    )

    parser.add_argument("--csv", "-f", help="CSV file containing desired record sets")

    parser.add_argument(
        "--list", "-l", action="store_true", help="List the record sets of the zone"
    )

    parser.add_argument(
        "--list-zones", action="store_true", help="List the account's hosted zones"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without making changes",
    )

    parser.add_argument(
        "--output-file",
        "-o",
        help="File to save dry run diff output (only used with --dry-run)",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace raw API requests and responses to stderr",
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.output_file and not args.dry_run:
        print("Error: --output-file can only be used with --dry-run")
        sys.exit(1)

    if not args.list_zones and not args.zone_id:
        print("Error: --zone-id is required")
        sys.exit(1)

    if args.csv:
        if not args.zone or not validate_zone_name(args.zone.rstrip(".")):
            print("Error: --zone must be a valid zone name when applying a CSV file")
            sys.exit(1)
        if not Path(args.csv).exists():
            print(f"Error: CSV file '{args.csv}' not found")
            sys.exit(1)
    elif not args.list and not args.list_zones:
        print("Error: one of --csv, --list or --list-zones is required")
        sys.exit(1)

    if not Path(args.config).exists():
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)

    try:
        config = load_config(args.config)
    except yaml.YAMLError as e:
        print(f"Error: Invalid configuration file: {e}")
        sys.exit(1)

    if args.debug:
        name = config.get("default_provider", "route53")
        config.setdefault("dns_providers", {}).setdefault(name, {})
        config["dns_providers"][name] = dict(config["dns_providers"][name] or {}, debug=True)

    config_logger(config, verbose=args.verbose)

    try:
        dns_manager = DNSManager(config)

        if args.list_zones:
            dns_manager.list_zones()
            sys.exit(0)

        if args.list:
            dns_manager.list_records(args.zone_id)
            sys.exit(0)

        success = dns_manager.process_csv(
            args.csv,
            args.zone_id,
            args.zone,
            dry_run=args.dry_run,
            output_file=args.output_file if args.dry_run else None,
        )

        if success:
            print("DNS record management completed successfully")
            sys.exit(0)
        else:
            print("DNS record management failed")
            sys.exit(1)

    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
