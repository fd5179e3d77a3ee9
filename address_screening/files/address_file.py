"""
Read the input address list.

No header row; one address per line. Handles \n, \r\n and \r line endings.
Only the first comma-separated field of a line is used, so a CSV export with
extra columns works too. Blank lines are dropped.
"""

from __future__ import annotations

from pathlib import Path


def parse_addresses(text: str) -> list[str]:
    out: list[str] = []
    for line in text.splitlines():
        address = line.split(",", 1)[0].strip()
        if address:
            out.append(address)
    return out


def read_addresses(path: str | Path) -> list[str]:
    """Return addresses in file order. Raises FileNotFoundError if path is missing."""
    return parse_addresses(Path(path).read_text(encoding="utf-8-sig"))
