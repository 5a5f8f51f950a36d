"""
Dataset Interpretation — Plain-language brief of a loaded table.

Summarises size and variable mix, the first few numeric columns
(mean/SD), the strongest correlation among the selected columns, the last
test run, and a statistical-power warning for small samples.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from app.core.engine.correlation import correlation_matrix
from app.core.engine.descriptive import mean, std
from app.core.engine.formatting import format_number, round2
from app.core.engine.schema import Table

logger = logging.getLogger(__name__)

MIN_ROWS_FOR_BRIEF = 3
LOW_POWER_THRESHOLD = 30
SUMMARISED_COLUMNS = 3


@dataclass
class Finding:
    tag: str      # info | sig | warn
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"tag": self.tag, "label": self.label}


@dataclass
class DatasetBrief:
    text: str = ""
    findings: List[Finding] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "findings": [f.to_dict() for f in self.findings]}


def interpret_dataset(
    table: Table,
    correlation_columns: Optional[Sequence[str]] = None,
    last_test_label: Optional[str] = None,
    low_power_threshold: int = LOW_POWER_THRESHOLD,
) -> Optional[DatasetBrief]:
    """
    Build the brief, or None for tables with fewer than 3 rows.

    `correlation_columns` defaults to every numeric column.
    """
    n = table.n_rows
    if n < MIN_ROWS_FOR_BRIEF:
        return None

    numeric = [c.name for c in table.numeric_columns()]
    categorical = [c.name for c in table.categorical_columns()]

    parts = [
        f"Dataset: N={n} observations across {len(table.columns)} variables "
        f"({len(numeric)} numeric, {len(categorical)} categorical). "
    ]

    leading = numeric[:SUMMARISED_COLUMNS]
    if leading:
        described = []
        for name in leading:
            v = table.numeric_vector(name)
            described.append(f"{name}: M={format_number(mean(v))}, SD={format_number(std(v))}")
        parts.append("; ".join(described) + ". ")

    selection = list(correlation_columns) if correlation_columns is not None else numeric
    matrix = correlation_matrix(table, selection)
    if len(matrix.columns) >= 2:
        strongest = matrix.strongest_pair()
        if strongest:
            a, b, r = strongest
            parts.append(f"Strongest correlation: r({a}↔{b})={format_number(round2(r))}. ")

    if last_test_label:
        parts.append(f"Last test: {last_test_label}. ")

    adequate = n >= low_power_threshold
    if not adequate:
        parts.append(f"Note: N<{low_power_threshold} limits statistical power; interpret with caution.")

    findings = [
        Finding("info", f"N = {n}"),
        Finding("info", f"{len(numeric)} NUMERIC"),
        Finding("info", f"{len(categorical)} CATEGORICAL"),
        Finding("sig", "POWER: ADEQUATE") if adequate
        else Finding("warn", f"POWER: LOW (N<{low_power_threshold})"),
    ]
    return DatasetBrief(text="".join(parts), findings=findings)
