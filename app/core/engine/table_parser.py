"""
Table Parser — Delimited Text → Typed Table
=============================================
Comma-separated text with a header line. Quoting is minimal on purpose:
a double quote toggles "inside quotes" (commas inside do not split) and is
never emitted into the cell; there is no escaped-quote handling.

Failure is not exceptional: fewer than two non-blank lines yields an
empty Table, which callers treat as "could not parse".
"""

import re
import logging
from typing import Dict, List

from app.core.engine.schema import Column, ColumnKind, Row, Table, infer_column_kind, parse_number

logger = logging.getLogger(__name__)

_HEADER_QUOTES = re.compile(r"^[\"']|[\"']$")

DEMO_CSV = """name,age,group,score,hours,satisfaction,region
Alice,28,A,82,12,4.2,North
Bob,35,B,67,8,3.1,South
Carol,22,A,91,15,4.7,North
David,41,B,58,6,2.8,East
Eve,30,A,88,14,4.5,West
Frank,27,B,72,9,3.4,South
Grace,33,A,95,16,4.9,North
Hank,45,B,54,5,2.5,East
Iris,29,A,85,13,4.3,West
Jack,38,B,63,7,3.0,South
Kim,24,A,90,15,4.6,North
Leo,36,B,60,6,2.9,East
Mia,31,A,87,14,4.4,West
Noah,42,B,55,5,2.6,South
Olga,26,A,93,16,4.8,North"""


def split_header(line: str) -> List[str]:
    """Header cells: plain comma split, one wrapping quote stripped each side."""
    return [_HEADER_QUOTES.sub("", cell.strip()) for cell in line.split(",")]


def split_fields(line: str) -> List[str]:
    """Quote-aware comma split of a data line; every field is trimmed."""
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str) -> Table:
    """
    Parse CSV text into a Table.

    Ragged rows are padded with "" (extra trailing fields are ignored).
    Duplicate header names collapse to one column: it keeps the position of
    the first occurrence and the cells of the last.
    """
    lines = [line.strip() for line in text.strip().split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        logger.debug(f"CSV has {len(lines)} non-blank line(s); returning empty table")
        return Table.empty()

    headers = split_header(lines[0])
    raw_rows = [split_fields(line) for line in lines[1:]]

    # Last occurrence wins for duplicate names; order follows first appearance
    source_index: Dict[str, int] = {}
    order: List[str] = []
    for i, name in enumerate(headers):
        if name not in source_index:
            order.append(name)
        source_index[name] = i
    if len(order) < len(headers):
        logger.debug(f"Duplicate headers collapsed: {len(headers)} → {len(order)} columns")

    def cell(raw: List[str], i: int) -> str:
        return raw[i] if i < len(raw) else ""

    columns: List[Column] = []
    for name in order:
        idx = source_index[name]
        kind = infer_column_kind(cell(r, idx) for r in raw_rows)
        columns.append(Column(name=name, kind=kind))

    rows: List[Row] = []
    for raw in raw_rows:
        row: Row = {}
        for col in columns:
            value = cell(raw, source_index[col.name])
            number = parse_number(value) if col.kind == ColumnKind.NUMERIC else None
            row[col.name] = number if number is not None else value
        rows.append(row)

    logger.debug(
        f"Parsed CSV: {len(rows)} rows, {len(columns)} columns "
        f"({sum(1 for c in columns if c.is_numeric)} numeric)"
    )
    return Table(columns=columns, rows=rows)
