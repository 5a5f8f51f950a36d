"""
Correlation Engine — Pearson r for pairs and column matrices.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app.core.engine.descriptive import mean, variance
from app.core.engine.formatting import round2
from app.core.engine.schema import ColumnKind, Table

logger = logging.getLogger(__name__)


def align(x: Sequence[float], y: Sequence[float]) -> Tuple[List[float], List[float]]:
    """Truncate both vectors to the shorter length."""
    n = min(len(x), len(y))
    return list(x[:n]), list(y[:n])


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson product-moment correlation.

    Unequal lengths are truncated to the shorter vector. Returns 0 when
    either side has zero variance (or there is nothing to correlate).
    """
    x, y = align(x, y)
    if not x:
        return 0.0
    mx, my = mean(x), mean(y)
    num = sum((xi - mx) * (yi - my) for xi, yi in zip(x, y))
    den = math.sqrt(sum((xi - mx) ** 2 for xi in x) * sum((yi - my) ** 2 for yi in y))
    if den == 0:
        return 0.0
    return num / den


@dataclass
class CorrelationMatrix:
    """Symmetric Pearson matrix over an explicit column selection."""
    columns: List[str] = field(default_factory=list)
    values: List[List[float]] = field(default_factory=list)
    n_rows: int = 0

    def get(self, a: str, b: str) -> float:
        return self.values[self.columns.index(a)][self.columns.index(b)]

    def strongest_pair(self) -> Optional[Tuple[str, str, float]]:
        """Off-diagonal pair with the largest |r|, or None if every |r| is 0."""
        best: Optional[Tuple[str, str, float]] = None
        best_abs = 0.0
        for i in range(len(self.columns)):
            for j in range(i + 1, len(self.columns)):
                r = abs(self.values[i][j])
                if r > best_abs:
                    best_abs = r
                    best = (self.columns[i], self.columns[j], r)
        return best

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": self.columns,
            "matrix": [[round2(v) for v in row] for row in self.values],
            "n_rows": self.n_rows,
        }


def correlation_matrix(table: Table, columns: Sequence[str]) -> CorrelationMatrix:
    """
    Pairwise Pearson r for the selected columns.

    Selection order is kept; names that are not numeric columns of the table
    are skipped. The diagonal is 1, or 0 for a constant column (pearson of
    a zero-variance vector).
    """
    selected = [
        name for name in dict.fromkeys(columns)
        if table.has_column(name) and table.column(name).kind == ColumnKind.NUMERIC
    ]
    vectors = [table.numeric_vector(name) for name in selected]

    k = len(selected)
    values = [[0.0] * k for _ in range(k)]
    for i in range(k):
        values[i][i] = 1.0 if variance(vectors[i]) > 0 else 0.0
        for j in range(i + 1, k):
            r = pearson(vectors[i], vectors[j])
            values[i][j] = r
            values[j][i] = r

    logger.debug(f"Correlation matrix over {k} columns ({table.n_rows} rows)")
    return CorrelationMatrix(columns=selected, values=values, n_rows=table.n_rows)
