"""
Descriptive Statistics — Moments, Order Statistics, Shape
============================================================
Operates on plain lists of floats (a column's numeric vector). Every
function accepts an empty vector and degenerate inputs fall back to 0
instead of raising.

Capabilities:
  1. Location        — mean, median, quartiles (linear interpolation)
  2. Spread          — sample variance (N−1), standard deviation, min/max
  3. Shape           — bias-corrected skewness, bias-corrected excess kurtosis
  4. Summaries       — DescriptiveSummary, five-number summary, histogram bins
  5. Group Means     — mean of a numeric column per category
"""

import math
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.core.engine.formatting import format_number, round2
from app.core.engine.schema import Table

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────
# 1-3. SCALAR STATISTICS
# ──────────────────────────────────────────────────────────

def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def variance(values: Sequence[float]) -> float:
    """Sample variance with N−1 denominator; 0 for fewer than 2 values."""
    n = len(values)
    if n < 2:
        return 0.0
    m = mean(values)
    return sum((v - m) ** 2 for v in values) / (n - 1)


def std(values: Sequence[float]) -> float:
    return math.sqrt(variance(values))


def median(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def quartile(values: Sequence[float], p: float) -> float:
    """Quantile at position (n−1)·p on sorted data, linearly interpolated."""
    if not values:
        return 0.0
    ordered = sorted(values)
    pos = (len(ordered) - 1) * p
    lo, hi = math.floor(pos), math.ceil(pos)
    if lo == hi:
        return ordered[lo]
    return ordered[lo] + (ordered[hi] - ordered[lo]) * (pos - lo)


def minimum(values: Sequence[float]) -> float:
    return min(values) if values else 0.0


def maximum(values: Sequence[float]) -> float:
    return max(values) if values else 0.0


def skewness(values: Sequence[float]) -> float:
    """Adjusted Fisher-Pearson skewness; 0 when n < 3 or SD is 0."""
    n = len(values)
    if n < 3:
        return 0.0
    m, s = mean(values), std(values)
    if s == 0:
        return 0.0
    return (n / ((n - 1) * (n - 2))) * sum(((v - m) / s) ** 3 for v in values)


def kurtosis(values: Sequence[float]) -> float:
    """Bias-corrected excess kurtosis; 0 when n < 4 or SD is 0."""
    n = len(values)
    if n < 4:
        return 0.0
    m, s = mean(values), std(values)
    if s == 0:
        return 0.0
    sum4 = sum(((v - m) / s) ** 4 for v in values)
    return (
        (n * (n + 1)) / ((n - 1) * (n - 2) * (n - 3)) * sum4
        - (3 * (n - 1) * (n - 1)) / ((n - 2) * (n - 3))
    )


# ──────────────────────────────────────────────────────────
# 4. SUMMARIES
# ──────────────────────────────────────────────────────────

@dataclass
class DescriptiveSummary:
    """Descriptive profile of one numeric column."""
    column: str
    n: int = 0
    mean: float = 0.0
    sd: float = 0.0
    median: float = 0.0
    q1: float = 0.0
    q3: float = 0.0
    min: float = 0.0
    max: float = 0.0
    skewness: float = 0.0
    kurtosis: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "n": self.n,
            "mean": round2(self.mean),
            "sd": round2(self.sd),
            "median": round2(self.median),
            "q1": round2(self.q1),
            "q3": round2(self.q3),
            "min": round2(self.min),
            "max": round2(self.max),
            "skewness": round2(self.skewness),
            "kurtosis": round2(self.kurtosis),
        }


def describe(values: Sequence[float], column: str = "") -> DescriptiveSummary:
    return DescriptiveSummary(
        column=column,
        n=len(values),
        mean=mean(values),
        sd=std(values),
        median=median(values),
        q1=quartile(values, 0.25),
        q3=quartile(values, 0.75),
        min=minimum(values),
        max=maximum(values),
        skewness=skewness(values),
        kurtosis=kurtosis(values),
    )


def describe_table(table: Table, columns: Optional[Sequence[str]] = None) -> List[DescriptiveSummary]:
    """Summaries for the given numeric columns (default: all numeric columns)."""
    names = list(columns) if columns is not None else [c.name for c in table.numeric_columns()]
    return [describe(table.numeric_vector(name), column=name) for name in names]


@dataclass
class FiveNumberSummary:
    """Box-plot statistics for one group."""
    name: str
    n: int
    min: float
    q1: float
    median: float
    q3: float
    max: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name, "n": self.n,
            "min": round2(self.min), "q1": round2(self.q1),
            "median": round2(self.median), "q3": round2(self.q3),
            "max": round2(self.max),
        }


def five_number_summary(values: Sequence[float], name: str = "") -> Optional[FiveNumberSummary]:
    if not values:
        return None
    ordered = sorted(values)
    return FiveNumberSummary(
        name=name,
        n=len(ordered),
        min=ordered[0],
        q1=quartile(ordered, 0.25),
        median=median(ordered),
        q3=quartile(ordered, 0.75),
        max=ordered[-1],
    )


def group_five_number_summaries(table: Table, group_column: str, value_column: str) -> List[FiveNumberSummary]:
    """One box per group that has numeric data, in first-seen group order."""
    summaries = []
    for group, vector in table.group_vectors(group_column, value_column).items():
        summary = five_number_summary(vector, name=group)
        if summary is not None:
            summaries.append(summary)
    return summaries


@dataclass
class HistogramBin:
    lower: float
    upper: float
    count: int

    @property
    def label(self) -> str:
        return f"{format_number(self.lower)}–{format_number(self.upper)}"

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "lower": round2(self.lower), "upper": round2(self.upper), "count": self.count}


def histogram(values: Sequence[float], bins: int = 5) -> List[HistogramBin]:
    """
    Equal-width bins over [min, max]; each bin is half-open except the last,
    which also holds the maximum. A constant vector gets width 1.
    """
    if not values or bins < 1:
        return []
    lo, hi = min(values), max(values)
    width = (hi - lo) / bins or 1.0

    result = []
    for i in range(bins):
        lower = lo + i * width
        upper = lo + (i + 1) * width
        last = i == bins - 1
        count = sum(1 for v in values if v >= lower and (v <= upper if last else v < upper))
        result.append(HistogramBin(lower=lower, upper=upper, count=count))
    return result


# ──────────────────────────────────────────────────────────
# 5. GROUP MEANS
# ──────────────────────────────────────────────────────────

def group_means(table: Table, category_column: str, value_column: str) -> Dict[str, float]:
    """Mean of `value_column` per category (0 for categories without numbers)."""
    return {
        group: mean(vector)
        for group, vector in table.group_vectors(category_column, value_column).items()
    }
