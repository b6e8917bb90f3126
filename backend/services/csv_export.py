"""
CSV export of local collections
"""
import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def records_to_csv(records: List[Dict[str, Any]]) -> Optional[str]:
    """
    Render records as CSV text.

    The header row comes from the keys of the first record; every cell is
    quoted. Returns None (and logs a warning) when there is nothing to export.
    """
    if not records:
        logger.warning("No data to export")
        return None

    headers = list(records[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in records:
        writer.writerow([_cell(row.get(h)) for h in headers])
    return buffer.getvalue()


def export_to_csv(records: List[Dict[str, Any]], filename) -> Optional[Path]:
    """Write records to `<filename>.csv`; returns the path written, if any"""
    text = records_to_csv(records)
    if text is None:
        return None

    path = Path(filename)
    if path.suffix != ".csv":
        path = path.with_name(f"{path.name}.csv")
    path.write_text(text, encoding="utf-8")
    logger.info(f"Exported {len(records)} rows to {path}")
    return path
