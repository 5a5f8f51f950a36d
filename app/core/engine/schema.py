"""
Schema & Table Model — Typed Columns over Dynamic Rows
========================================================
The in-memory dataset every engine component consumes.

  Column   — name + kind (numeric | categorical), fixed once inferred
  Table    — ordered columns + ordered rows (dict per row)
  Row      — column name → float (numeric cell) or str (categorical / unparseable cell)

Kind inference is a one-shot heuristic over raw strings: a column is numeric
when more than 80% of its non-blank cells parse as finite numbers, so a few
malformed cells never flip an otherwise numeric column to categorical.
Appending rows never re-infers kind.
"""

import math
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

NUMERIC_SHARE_THRESHOLD = 0.8

CellValue = Union[float, str]
Row = Dict[str, CellValue]


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


# ═══════════════════════════════════════════════════════════════
# CELL HELPERS
# ═══════════════════════════════════════════════════════════════

def parse_number(text: Any) -> Optional[float]:
    """Parse a cell as a finite real number; None if blank or not numeric."""
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        try:
            value = float(text)
        except OverflowError:
            return None
        return value if math.isfinite(value) else None
    raw = str(text).strip()
    if not raw or "_" in raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def display_value(value: Any) -> str:
    """Stringify a cell the way group labels are shown (42.0 → '42')."""
    if is_number(value):
        number = float(value)
        if number.is_integer():
            return str(int(number))
        return repr(number)
    return str(value)


def infer_column_kind(values: Iterable[str]) -> ColumnKind:
    """
    Classify a raw text column.

    Blank cells are ignored. No non-blank cells → categorical. Otherwise
    numeric iff the share of cells parsing as finite numbers exceeds 0.8.
    """
    non_empty = [v for v in values if str(v).strip() != ""]
    if not non_empty:
        return ColumnKind.CATEGORICAL
    numeric_count = sum(1 for v in non_empty if parse_number(v) is not None)
    if numeric_count / len(non_empty) > NUMERIC_SHARE_THRESHOLD:
        return ColumnKind.NUMERIC
    return ColumnKind.CATEGORICAL


# ═══════════════════════════════════════════════════════════════
# DATA CLASSES
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Column:
    name: str
    kind: ColumnKind

    @property
    def is_numeric(self) -> bool:
        return self.kind == ColumnKind.NUMERIC

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "kind": self.kind.value}


@dataclass
class Table:
    """
    Ordered columns plus ordered rows.

    Built by the CSV parser or from an explicit schema (manual mode). The
    column set is fixed for the table's lifetime; re-importing data means
    building a new Table.
    """
    columns: List[Column] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    # ──────────────────────────────────────────────────────────
    # CONSTRUCTION
    # ──────────────────────────────────────────────────────────

    @classmethod
    def empty(cls) -> "Table":
        return cls()

    @classmethod
    def from_schema(cls, columns: Sequence[Union[Column, Mapping[str, Any]]]) -> "Table":
        """
        Manual mode: build a zero-row table from declared columns.

        Accepts Column objects or {"name", "kind"} mappings. Blank names are
        skipped, names are trimmed, and at least one column must remain.
        """
        resolved: List[Column] = []
        seen = set()
        for entry in columns:
            if isinstance(entry, Column):
                name, kind = entry.name, entry.kind
            else:
                name = str(entry.get("name", ""))
                kind = ColumnKind(entry.get("kind", ColumnKind.NUMERIC))
            name = name.strip()
            if not name:
                continue
            if name in seen:
                raise ValueError(f"Duplicate column name '{name}' in schema")
            seen.add(name)
            resolved.append(Column(name=name, kind=ColumnKind(kind)))

        if not resolved:
            raise ValueError("Schema needs at least one named column")
        return cls(columns=resolved, rows=[])

    # ──────────────────────────────────────────────────────────
    # SHAPE
    # ──────────────────────────────────────────────────────────

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def is_empty(self) -> bool:
        """True for the parse-failure sentinel: no columns or no rows."""
        return not self.columns or not self.rows

    def has_column(self, name: str) -> bool:
        return any(c.name == name for c in self.columns)

    def column(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(f"Column '{name}' not found. Available: {self.column_names}")

    def numeric_columns(self) -> List[Column]:
        return [c for c in self.columns if c.kind == ColumnKind.NUMERIC]

    def categorical_columns(self) -> List[Column]:
        return [c for c in self.columns if c.kind == ColumnKind.CATEGORICAL]

    # ──────────────────────────────────────────────────────────
    # MUTATION (append only)
    # ──────────────────────────────────────────────────────────

    def append_row(self, values: Mapping[str, Any]) -> Row:
        """
        Append one manually entered row.

        Every numeric column needs a parseable number; categorical cells are
        kept as text ("" when missing). The row is validated as a whole
        before it is added.
        """
        unknown = [k for k in values if not self.has_column(k)]
        if unknown:
            raise ValueError(f"Unknown columns {unknown}. Available: {self.column_names}")

        row: Row = {}
        invalid = []
        for c in self.columns:
            raw = values.get(c.name, "")
            if c.kind == ColumnKind.NUMERIC:
                number = parse_number(raw)
                if number is None:
                    invalid.append(c.name)
                else:
                    row[c.name] = number
            else:
                row[c.name] = "" if raw is None else str(raw)

        if invalid:
            raise ValueError(f"Numeric columns need valid numbers: {invalid}")

        self.rows.append(row)
        return row

    # ──────────────────────────────────────────────────────────
    # EXTRACTION
    # ──────────────────────────────────────────────────────────

    def numeric_vector(self, name: str) -> List[float]:
        """Numeric cells of one column in row order; text cells are dropped."""
        self.column(name)
        return [float(r[name]) for r in self.rows if is_number(r.get(name))]

    def unique_values(self, name: str) -> List[str]:
        """Distinct display values of a column, in first-seen order."""
        self.column(name)
        seen: Dict[str, None] = {}
        for r in self.rows:
            seen.setdefault(display_value(r.get(name, "")), None)
        return list(seen)

    def group_vectors(
        self,
        group_column: str,
        value_column: str,
        groups: Optional[Sequence[str]] = None,
    ) -> Dict[str, List[float]]:
        """
        Split a numeric column by the values of a grouping column.

        Groups default to every distinct value of `group_column`, in
        first-seen order. A requested group with no rows maps to [].
        """
        self.column(group_column)
        self.column(value_column)
        names = list(groups) if groups is not None else self.unique_values(group_column)
        vectors: Dict[str, List[float]] = {g: [] for g in names}
        for r in self.rows:
            key = display_value(r.get(group_column, ""))
            value = r.get(value_column)
            if key in vectors and is_number(value):
                vectors[key].append(float(value))
        return vectors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [c.to_dict() for c in self.columns],
            "rows": [dict(r) for r in self.rows],
            "n_rows": self.n_rows,
        }
