"""
Module 04 - Address Sources
Simple CSV reader for address lists.

Parsing rules:
- Blank lines are skipped
- Cells are split on commas, trimmed, and stripped of one pair of
  surrounding single or double quotes
- The first row is a header unless has_header=False; has_header=None
  treats it as a header only when its first cell is not an address
- Data rows are numbered from 2 under a header, from 1 without one
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path


_DOUBLE_QUOTED = re.compile(r'^"(.*)"$')
_SINGLE_QUOTED = re.compile(r"^'(.*)'$")
_ADDRESS_LIKE = re.compile(r"(0x)?[0-9a-fA-F]{40}")


class AddressSourceError(ValueError):
    """The requested column cannot be read from the source."""


@dataclass
class ParsedCsv:
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)


@dataclass
class AddressColumn:
    """Raw cell values for the selected column, plus row numbering."""
    values: list[str] = field(default_factory=list)
    first_row: int = 2
    header: str | None = None


def _clean_cell(cell: str) -> str:
    cell = cell.strip()
    cell = _DOUBLE_QUOTED.sub(r"\1", cell)
    cell = _SINGLE_QUOTED.sub(r"\1", cell)
    return cell


def detect_header(text: str) -> bool:
    """True unless the first non-blank line starts with an address."""
    for line in text.splitlines():
        if line.strip():
            return _ADDRESS_LIKE.fullmatch(_clean_cell(line.split(",")[0])) is None
    return False


def parse_csv(text: str, *, has_header: bool | None = True) -> ParsedCsv:
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return ParsedCsv()

    if has_header is None:
        has_header = detect_header(text)

    rows = [[_clean_cell(c) for c in line.split(",")] for line in lines]
    if not has_header:
        return ParsedCsv(headers=[], rows=rows)
    return ParsedCsv(headers=rows[0], rows=rows[1:])


def _resolve_column(parsed: ParsedCsv, column: int | str | None) -> int:
    if column is None:
        return 0
    if isinstance(column, int):
        return column
    if column.isdigit():
        return int(column)
    try:
        return parsed.headers.index(column)
    except ValueError:
        lowered = [h.lower() for h in parsed.headers]
        if column.lower() in lowered:
            return lowered.index(column.lower())
        raise AddressSourceError(
            f"Column {column!r} not found in header {parsed.headers}"
        ) from None


def read_address_column(
    text: str,
    column: int | str | None = None,
    *,
    has_header: bool | None = True,
) -> AddressColumn:
    """
    Extract one column of raw cells from CSV text.

    Missing cells (short rows) come back as empty strings so they are
    reported as invalid rows downstream rather than silently dropped.
    """
    if has_header is None:
        has_header = detect_header(text)
    parsed = parse_csv(text, has_header=has_header)
    index = _resolve_column(parsed, column)
    if index < 0:
        raise AddressSourceError(f"Column index must be non-negative, got {index}")

    values = [row[index] if index < len(row) else "" for row in parsed.rows]
    header = parsed.headers[index] if index < len(parsed.headers) else None
    return AddressColumn(
        values=values,
        first_row=2 if has_header else 1,
        header=header,
    )


def read_address_file(
    path: str | Path,
    column: int | str | None = None,
    *,
    has_header: bool | None = True,
) -> AddressColumn:
    text = Path(path).read_text(encoding="utf-8")
    return read_address_column(text, column, has_header=has_header)


__all__ = [
    "AddressSourceError",
    "ParsedCsv",
    "AddressColumn",
    "detect_header",
    "parse_csv",
    "read_address_column",
    "read_address_file",
]
