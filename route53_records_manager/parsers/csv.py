import csv
import logging
from typing import Dict, List, Tuple

from ..api.models import RRSet
from ..utils.validators import (
    normalize_name,
    validate_ipv4,
    validate_record_name,
    validate_record_type,
    validate_ttl,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300


class CSVParser:
    """
    Reads desired record sets from a CSV file.

    Required columns are Name, Type and Value; TTL is optional. Rows that
    share a name and type become one record set whose values keep the row
    order.
    """

    def __init__(self, csv_path: str):
        self.csv_path = csv_path

    def parse(self) -> List[RRSet]:
        """Parse CSV file and validate records."""
        rrsets: Dict[Tuple[str, str], RRSet] = {}

        try:
            with open(self.csv_path, "r", newline="") as f:
                reader = csv.DictReader(f)

                missing = {"Name", "Type", "Value"} - set(reader.fieldnames or [])
                if missing:
                    raise ValueError(
                        f"CSV must contain 'Name', 'Type' and 'Value' columns (missing {', '.join(sorted(missing))})"
                    )

                for row_num, row in enumerate(reader, start=2):
                    name = (row["Name"] or "").strip()
                    record_type = (row["Type"] or "").strip().upper()
                    value = (row["Value"] or "").strip()
                    ttl = (row.get("TTL") or "").strip() or DEFAULT_TTL

                    if not validate_record_name(name):
                        logger.warning(f"Invalid name '{name}' at row {row_num}, skipping")
                        continue

                    if not validate_record_type(record_type):
                        logger.warning(f"Invalid type '{record_type}' at row {row_num}, skipping")
                        continue

                    if not value:
                        logger.warning(f"Empty value at row {row_num}, skipping")
                        continue

                    if record_type == "A" and not validate_ipv4(value):
                        logger.warning(f"Invalid IPv4 '{value}' at row {row_num}, skipping")
                        continue

                    if not validate_ttl(ttl):
                        logger.warning(f"Invalid TTL '{ttl}' at row {row_num}, skipping")
                        continue

                    key = (normalize_name(name), record_type)
                    if key in rrsets:
                        existing = rrsets[key]
                        if existing.ttl != int(ttl):
                            logger.warning(
                                f"TTL {ttl} at row {row_num} differs from {existing.ttl} for {name} {record_type}, keeping {existing.ttl}"
                            )
                        existing.values.append(value)
                    else:
                        rrsets[key] = RRSet(
                            name=name, type=record_type, ttl=int(ttl), values=[value]
                        )

            logger.info(f"Successfully parsed {len(rrsets)} record sets from CSV")

        except FileNotFoundError:
            raise FileNotFoundError(f"CSV file not found: {self.csv_path}")
        except Exception as e:
            raise Exception(f"Error parsing CSV: {e}")

        return list(rrsets.values())
