"""
CSV report sink: header once, rows appended one batch at a time.

None is written as an empty field.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Sequence


class CsvReportWriter:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def write_header(self, fields: Sequence[str]) -> None:
        """Create (or truncate) the report with its header row."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerow(fields)

    def append_rows(self, rows: Sequence[Sequence[Any]]) -> None:
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            for row in rows:
                w.writerow(["" if v is None else v for v in row])
