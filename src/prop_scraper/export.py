"""Render flattened extraction results as spreadsheet rows.

Two sinks share the same row model (one header row of keys, one row of values):

  to_tsv        -- tab-separated text for pasting into a spreadsheet
  CsvSheetSink  -- appends header + value rows to one CSV file per site
"""

import csv
import io
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def format_value(value: Any) -> str:
    """Stringify one result value the way a spreadsheet cell should show it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(format_value(item) for item in value)
    return str(value)


def to_rows(flat: dict[str, Any]) -> list[list[str]]:
    """Return ``[header_row, value_row]`` for a flattened result."""
    return [[str(key) for key in flat], [format_value(value) for value in flat.values()]]


def to_tsv(flat: dict[str, Any], include_headers: bool = True) -> str:
    """Tab-separated text of the result, optionally preceded by a header line.

    Cells holding tabs, line breaks or quotes are quoted so a paste keeps them in one cell.
    """
    headers, values = to_rows(flat)
    buf = io.StringIO()
    csv.writer(buf, delimiter="\t", lineterminator="\n").writerows([headers, values] if include_headers else [values])
    return buf.getvalue().removesuffix("\n")


class CsvSheetSink:
    """Append scraped rows to ``<export_dir>/<site>.csv``."""

    def __init__(self, export_dir: Path):
        self.export_dir = Path(export_dir)

    def path_for(self, site_name: str) -> Path:
        safe = _UNSAFE_FILENAME_RE.sub("_", site_name).strip("_") or "export"
        return self.export_dir / f"{safe}.csv"

    def append(self, site_name: str, flat: dict[str, Any]) -> tuple[Path, bool]:
        """Append the header and value rows; returns (path, created_new_file)."""
        path = self.path_for(site_name)
        created = not path.exists()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8", newline="") as fh:
            csv.writer(fh).writerows(to_rows(flat))
        logger.info("%s %d fields to %s", "Created" if created else "Appended", len(flat), path)
        return path, created
