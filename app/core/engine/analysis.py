"""
Analysis Runners — Table-level test procedures with display-ready results.

Each runner pulls the needed vectors out of a Table, calls the matching
function in hypothesis_tests, and formats the outcome as a TestResult:
an ordered label → value mapping (numbers rounded to 2 decimals, p-values
rendered as "< .0001" or 4 decimals) plus a human-readable test label.
None still means "not computable".
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from app.core.engine.formatting import display_statistic, format_number, format_p_value, round2
from app.core.engine.hypothesis_tests import (
    one_way_anova,
    pearson_test,
    simple_regression,
    welch_t_test,
)
from app.core.engine.schema import Table

logger = logging.getLogger(__name__)

MIN_TABLE_ROWS = 3

DisplayValue = Union[int, float, str]

T_TEST_NOTE = (
    "Welch’s t-test; two-tailed p from t-distribution. "
    "Cohen’s d: small ≥ 0.2, medium ≥ 0.5, large ≥ 0.8."
)
CORRELATION_NOTE = "Pearson product-moment correlation. p from t-transform: t = r√((n−2)/(1−r²))."
REGRESSION_NOTE = "OLS regression. Slope p from t-distribution. R² = proportion of Y variance explained by X."
ANOVA_NOTE = "One-way ANOVA. F-ratio tests equality of group means. p from F-distribution."


@dataclass
class TestResult:
    """Display-ready outcome of one test invocation."""
    __test__ = False  # keep pytest from collecting this as a test class

    label: str
    values: Dict[str, DisplayValue] = field(default_factory=dict)
    note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "values": dict(self.values), "note": self.note}


def _enough_rows(table: Table, min_rows: int) -> bool:
    if table.n_rows < min_rows:
        logger.debug(f"Table has {table.n_rows} rows; tests need at least {min_rows}")
        return False
    return True


# ──────────────────────────────────────────────────────────
# T-TEST
# ──────────────────────────────────────────────────────────

def run_t_test(
    table: Table,
    group_column: str,
    outcome_column: str,
    group_a: str,
    group_b: str,
    min_rows: int = MIN_TABLE_ROWS,
) -> Optional[TestResult]:
    """Compare `outcome_column` between two values of `group_column`."""
    if not _enough_rows(table, min_rows):
        return None
    vectors = table.group_vectors(group_column, outcome_column, groups=[group_a, group_b])
    stats = welch_t_test(vectors[group_a], vectors[group_b])
    if stats is None:
        return None

    d = round2(stats.cohens_d)
    return TestResult(
        label=f"Independent Samples t-Test: {outcome_column} by {group_column}",
        values={
            f"M ({group_a})": round2(stats.mean_a),
            f"M ({group_b})": round2(stats.mean_b),
            f"n ({group_a})": stats.n_a,
            f"n ({group_b})": stats.n_b,
            "t-statistic": round2(stats.t),
            "df": round2(stats.df),
            "p-value": format_p_value(stats.p_value),
            "Cohen's d": f"{format_number(d)} ({stats.effect_size_class})",
        },
        note=T_TEST_NOTE,
    )


# ──────────────────────────────────────────────────────────
# CORRELATION
# ──────────────────────────────────────────────────────────

def run_correlation_test(
    table: Table, var1: str, var2: str, min_rows: int = MIN_TABLE_ROWS,
) -> Optional[TestResult]:
    if not _enough_rows(table, min_rows):
        return None
    stats = pearson_test(table.numeric_vector(var1), table.numeric_vector(var2))
    if stats is None:
        return None

    return TestResult(
        label=f"Pearson Correlation: {var1} × {var2}",
        values={
            "Pearson r": round2(stats.r),
            "r²": round2(stats.r_squared),
            "N (pairs)": stats.n,
            "t-statistic": display_statistic(stats.t),
            "p-value": format_p_value(stats.p_value),
        },
        note=CORRELATION_NOTE,
    )


# ──────────────────────────────────────────────────────────
# REGRESSION
# ──────────────────────────────────────────────────────────

def run_regression(
    table: Table, dependent: str, independent: str, min_rows: int = MIN_TABLE_ROWS,
) -> Optional[TestResult]:
    """Regress `dependent` (y) on `independent` (x)."""
    if not _enough_rows(table, min_rows):
        return None
    stats = simple_regression(table.numeric_vector(dependent), table.numeric_vector(independent))
    if stats is None:
        return None

    slope, intercept = round2(stats.slope), round2(stats.intercept)
    return TestResult(
        label=f"OLS Regression: {dependent} ~ {independent}",
        values={
            "Intercept (β₀)": intercept,
            "Slope (β₁)": slope,
            "Slope t-stat": display_statistic(stats.t),
            "Slope p-value": format_p_value(stats.p_value),
            "Pearson r": round2(stats.r),
            "R²": f"{format_number(round2(stats.r_squared * 100))}%",
            "Equation": f"Ŷ = {format_number(slope)}x + {format_number(intercept)}",
        },
        note=REGRESSION_NOTE,
    )


# ──────────────────────────────────────────────────────────
# ANOVA
# ──────────────────────────────────────────────────────────

def run_anova(
    table: Table, group_column: str, outcome_column: str, min_rows: int = MIN_TABLE_ROWS,
) -> Optional[TestResult]:
    """
    One-way ANOVA of `outcome_column` across every group with numeric data.

    "Groups" names every distinct value of `group_column`, including groups
    left out of the test for lack of numeric data.
    """
    if not _enough_rows(table, min_rows):
        return None
    vectors = table.group_vectors(group_column, outcome_column)
    analysed = {name: v for name, v in vectors.items() if v}
    if len(analysed) < 2:
        logger.debug(f"ANOVA needs 2 groups with data; {group_column} has {len(analysed)}")
        return None
    stats = one_way_anova(list(analysed.values()))
    if stats is None:
        return None

    return TestResult(
        label=f"One-Way ANOVA: {outcome_column} by {group_column}",
        values={
            "F-statistic": round2(stats.f),
            "df (between)": stats.df_between,
            "df (within)": stats.df_within,
            "MS (between)": round2(stats.ms_between),
            "MS (within)": round2(stats.ms_within),
            "p-value": format_p_value(stats.p_value),
            "Groups": ", ".join(vectors),
        },
        note=ANOVA_NOTE,
    )
