"""
DNS Records Manager - Automated record set management for Route53 hosted zones

This module processes CSV files of desired record sets and brings a hosted
zone in line with them in an idempotent and safe manner, submitting all
changes as a single atomic change batch.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Union

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..api.models import RRSet
from ..parsers.csv import CSVParser
from ..providers.dns_client import DNSClient
from ..utils.config import load_config
from .record_manager import RecordManager

console = Console()
logger = logging.getLogger(__name__)


def _describe(rrset: RRSet) -> str:
    if rrset.alias_target is not None:
        return f"ALIAS {rrset.alias_target.dns_name}"
    return ", ".join(rrset.values)


class DNSManager:
    """Main DNS management class that orchestrates the entire process."""

    def __init__(self, config: Union[str, Dict] = "configs/config.yaml"):
        """Initialize the DNS manager with a configuration dict or YAML path."""
        self.config = load_config(config) if isinstance(config, str) else config
        self.dns_client = DNSClient(self.config)
        self.record_manager = RecordManager(self.dns_client)

    def process_csv(
        self,
        csv_path: str,
        zone_id: str,
        zone: str,
        dry_run: bool = False,
        output_file: Optional[str] = None,
    ) -> bool:
        """Process CSV file and manage record sets."""
        try:
            records = CSVParser(csv_path).parse()
        except Exception as e:
            logger.error(f"Error processing CSV: {e}")
            console.print(f"[red]Error: {e}[/red]")
            return False

        if not records:
            console.print("[red]No valid records found in CSV file[/red]")
            return False

        console.print(f"[green]Successfully parsed {len(records)} record sets from CSV[/green]")
        return self.process_records(records, zone_id, zone, dry_run, output_file)

    def process_records(
        self,
        records: List[RRSet],
        zone_id: str,
        zone: str,
        dry_run: bool = False,
        output_file: Optional[str] = None,
        comment: str = "",
    ) -> bool:
        """Bring the zone in line with ``records``."""
        try:
            console.print("[green]Fetching current record sets...[/green]")
            current_records = self.dns_client.get_records(zone_id)
            console.print(f"[blue]Found {len(current_records)} existing record sets[/blue]")

            changes = self.record_manager.analyze_changes(current_records, records, zone)
            self._display_changes_summary(changes)

            if dry_run:
                console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")

                if output_file:
                    self._save_dry_run_output(changes, output_file)
                    console.print(f"[green]Dry run output saved to: {output_file}[/green]")

                return True

            if changes["total_changes"] == 0:
                console.print("[green]No changes required - DNS records are up to date[/green]")
                return True

            self._show_changes(changes)
            comment = comment or f"route53-manager {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
            if self._apply_changes(changes, zone_id, comment):
                console.print("[green]All DNS changes applied successfully![/green]")
                return True

            console.print("[red]DNS changes failed to apply[/red]")
            return False

        except Exception as e:
            logger.error(f"Error processing records: {e}")
            console.print(f"[red]Error: {e}[/red]")
            return False

    def list_records(self, zone_id: str) -> List[RRSet]:
        """Fetch and display the record sets of a zone."""
        records = self.dns_client.get_records(zone_id)

        table = Table(title=f"Record sets in {zone_id}")
        table.add_column("Name", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("TTL", style="white")
        table.add_column("Values", style="white")
        table.add_column("Set ID", style="white")

        for record in records:
            table.add_row(
                record.name,
                record.type,
                "" if record.alias_target is not None else str(record.ttl),
                _describe(record),
                record.set_identifier or "",
            )

        console.print(table)
        return records

    def list_zones(self) -> list:
        """Fetch and display hosted zones, where the provider has them."""
        provider = self.dns_client.provider
        if not hasattr(provider, "list_hosted_zones"):
            console.print("[yellow]The configured provider does not list hosted zones[/yellow]")
            return []

        zones = provider.list_hosted_zones()

        table = Table(title="Hosted zones")
        table.add_column("Id", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Records", style="white")
        table.add_column("Private", style="white")

        for zone in zones:
            table.add_row(zone.id, zone.name, str(zone.record_count), "yes" if zone.private_zone else "no")

        console.print(table)
        return zones

    def _display_changes_summary(self, changes: Dict):
        """Display a summary of planned changes."""
        table = Table(title="DNS Changes Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Count", style="magenta")
        table.add_column("Details", style="white")

        for label, key in (
            ("Create", "creates"),
            ("Update", "updates"),
            ("Delete", "deletes"),
            ("No Change", "no_changes"),
        ):
            if changes[key]:
                table.add_row(
                    label,
                    str(len(changes[key])),
                    ", ".join(f"{r.name} {r.type}" for r in changes[key]),
                )

        console.print(table)
        console.print(f"\n[bold]Total changes: {changes['total_changes']}[/bold]")

    def _show_changes(self, changes: Dict):
        """Print the detailed changes about to be applied."""
        console.print(f"\n[bold]About to apply {changes['total_changes']} DNS changes[/bold]")

        if changes.get("creates", []):
            console.print("\n[green]Record sets to create:[/green]")
            for record in changes["creates"]:
                console.print(f"  + {record.name} {record.type} -> {_describe(record)}")

        if changes.get("updates", []):
            console.print("\n[yellow]Record sets to update:[/yellow]")
            for record in changes["updates"]:
                console.print(f"  ~ {record.name} {record.type} -> {_describe(record)}")

        if changes.get("deletes", []):
            console.print("\n[red]Record sets to delete:[/red]")
            for record in changes["deletes"]:
                console.print(f"  - {record.name} {record.type}")

    def _apply_changes(self, changes: Dict, zone_id: str, comment: str) -> bool:
        """Submit all changes as one change batch."""
        batch = self.record_manager.build_change_batch(changes, comment)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Submitting change batch...", total=1)
            try:
                info = self.dns_client.apply_changes(zone_id, batch.changes, batch.comment)
                progress.update(task, advance=1)
            except Exception as e:
                logger.error(f"Failed to apply change batch to {zone_id}: {e}")
                console.print(f"[red]Failed to apply change batch: {e}[/red]")
                return False

        logger.info(f"Change batch {info.id} accepted with status {info.status}")
        console.print(f"[blue]Change {info.id} submitted ({info.status})[/blue]")
        return True

    def _save_dry_run_output(self, changes: Dict, output_file: str):
        """Save dry run output to a file."""
        try:
            with open(output_file, "w") as f:
                f.write("=" * 60 + "\n")
                f.write("ROUTE53 RECORDS MANAGER - DRY RUN SUMMARY\n")
                f.write("=" * 60 + "\n\n")

                f.write(f"Total Changes: {changes['total_changes']}\n")
                f.write(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

                for title, key, marker in (
                    ("RECORD SETS TO CREATE:", "creates", "+"),
                    ("RECORD SETS TO UPDATE:", "updates", "~"),
                    ("RECORD SETS TO DELETE:", "deletes", "-"),
                    ("RECORD SETS WITH NO CHANGES:", "no_changes", "="),
                ):
                    if changes.get(key, []):
                        f.write(title + "\n")
                        f.write("-" * len(title) + "\n")
                        for record in changes[key]:
                            f.write(f"  {marker} {record.name:<30} {record.type:<6} -> {_describe(record)}\n")
                        f.write("\n")

                f.write("=" * 60 + "\n")
                f.write("END OF DRY RUN SUMMARY\n")
                f.write("=" * 60 + "\n")

            logger.info(f"Dry run output saved to: {output_file}")
        except Exception as e:
            logger.error(f"Failed to save dry run output to {output_file}: {e}")
            console.print(f"[red]Warning: Failed to save dry run output to {output_file}: {e}[/red]")
