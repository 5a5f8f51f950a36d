"""
Statistical Workbench Engine — Core Module
============================================
Computation-only engine behind the workbench: CSV ingestion with schema
inference, descriptive statistics, Pearson correlation, and four classical
tests with exact p-values from first-principles special functions.

Components:
  ┌──────────────────────────────────────────────────────┐
  │ schema              — Column / Table / kind inference │
  │ table_parser        — CSV text → Table                │
  │ descriptive         — moments, quartiles, shape       │
  │ special_functions   — lnΓ, I_x(a,b), t / F CDFs       │
  │ correlation         — Pearson r, correlation matrix   │
  │ hypothesis_tests    — Welch t, r test, OLS, ANOVA     │
  │ analysis            — table-level runners → TestResult│
  │ interpretation      — plain-language dataset brief    │
  └──────────────────────────────────────────────────────┘

Every function is pure and synchronous; "not computable" is signalled by
returning None (or an empty Table from the parser), never by raising.

Usage:
  from app.core.engine import parse_csv, run_t_test
  table = parse_csv(text)
  result = run_t_test(table, "group", "score", "A", "B")
"""

from .schema import Column, ColumnKind, Table, infer_column_kind, parse_number
from .table_parser import DEMO_CSV, parse_csv, split_fields
from .descriptive import (
    DescriptiveSummary,
    FiveNumberSummary,
    HistogramBin,
    describe,
    describe_table,
    five_number_summary,
    group_five_number_summaries,
    group_means,
    histogram,
    kurtosis,
    mean,
    median,
    quartile,
    skewness,
    std,
    variance,
)
from .special_functions import (
    beta_continued_fraction,
    f_cdf,
    ln_gamma,
    p_value_from_f,
    p_value_from_t,
    regularized_incomplete_beta,
    student_t_cdf,
)
from .correlation import CorrelationMatrix, correlation_matrix, pearson
from .hypothesis_tests import (
    AnovaStats,
    CorrelationTestStats,
    RegressionStats,
    TTestStats,
    classify_cohens_d,
    one_way_anova,
    pearson_test,
    simple_regression,
    welch_t_test,
)
from .analysis import TestResult, run_anova, run_correlation_test, run_regression, run_t_test
from .interpretation import DatasetBrief, Finding, interpret_dataset
from .formatting import format_p_value, round2

__all__ = [
    # ── Ingestion ──
    "Column", "ColumnKind", "Table", "infer_column_kind", "parse_number",
    "DEMO_CSV", "parse_csv", "split_fields",
    # ── Descriptive ──
    "DescriptiveSummary", "FiveNumberSummary", "HistogramBin",
    "describe", "describe_table", "five_number_summary", "group_five_number_summaries",
    "group_means", "histogram",
    "mean", "variance", "std", "median", "quartile", "skewness", "kurtosis",
    # ── Special functions ──
    "ln_gamma", "beta_continued_fraction", "regularized_incomplete_beta",
    "student_t_cdf", "f_cdf", "p_value_from_t", "p_value_from_f",
    # ── Correlation & tests ──
    "CorrelationMatrix", "correlation_matrix", "pearson",
    "TTestStats", "CorrelationTestStats", "RegressionStats", "AnovaStats",
    "classify_cohens_d", "welch_t_test", "pearson_test", "simple_regression", "one_way_anova",
    "TestResult", "run_t_test", "run_correlation_test", "run_regression", "run_anova",
    # ── Interpretation & display ──
    "DatasetBrief", "Finding", "interpret_dataset",
    "format_p_value", "round2",
]
