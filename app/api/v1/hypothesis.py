"""
Hypothesis Test Endpoints
===========================
  POST /tests/t-test        — Welch two-sample t-test between two groups
  POST /tests/correlation   — Pearson correlation significance test
  POST /tests/regression    — simple OLS regression of y on x
  POST /tests/anova         — one-way ANOVA across all groups

Each returns a TestResult payload (label, ordered values, method note);
422 when the data cannot support the test.
"""

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.api.v1.tables import CsvRequest, load_table, not_computable, require_columns
from app.config import settings
from app.core.engine import (
    TestResult,
    run_anova,
    run_correlation_test,
    run_regression,
    run_t_test,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tests", tags=["Workbench — Hypothesis Tests"])


class TTestRequest(CsvRequest):
    group_column: str = Field(..., description="Categorical column that splits the rows")
    outcome_column: str = Field(..., description="Numeric outcome")
    group_a: str
    group_b: str


class CorrelationTestRequest(CsvRequest):
    var1: str
    var2: str


class RegressionRequest(CsvRequest):
    dependent: str = Field(..., description="Y (numeric)")
    independent: str = Field(..., description="X (numeric)")


class AnovaRequest(CsvRequest):
    group_column: str
    outcome_column: str


class TestResultResponse(BaseModel):
    label: str
    values: Dict[str, Any] = {}
    note: str = ""


def _respond(name: str, run: Callable[[], Optional[TestResult]], reason: str) -> TestResultResponse:
    try:
        result = run()
    except Exception as e:
        logger.error(f"{name} error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})
    if result is None:
        raise not_computable(reason)
    return TestResultResponse(**result.to_dict())


@router.post("/t-test", response_model=TestResultResponse)
async def t_test(request: TTestRequest):
    table = await load_table(request.csv)
    require_columns(table, [request.group_column])
    require_columns(table, [request.outcome_column], numeric=True)
    return _respond(
        "t-test",
        lambda: run_t_test(
            table, request.group_column, request.outcome_column,
            request.group_a, request.group_b, min_rows=settings.MIN_ROWS_FOR_TESTS,
        ),
        "t-test needs at least 2 values per group and non-zero variance",
    )


@router.post("/correlation", response_model=TestResultResponse)
async def correlation_test(request: CorrelationTestRequest):
    table = await load_table(request.csv)
    require_columns(table, [request.var1, request.var2], numeric=True)
    return _respond(
        "Correlation test",
        lambda: run_correlation_test(table, request.var1, request.var2, min_rows=settings.MIN_ROWS_FOR_TESTS),
        "Correlation test needs at least 3 paired values",
    )


@router.post("/regression", response_model=TestResultResponse)
async def regression(request: RegressionRequest):
    table = await load_table(request.csv)
    require_columns(table, [request.dependent, request.independent], numeric=True)
    return _respond(
        "Regression",
        lambda: run_regression(
            table, request.dependent, request.independent, min_rows=settings.MIN_ROWS_FOR_TESTS,
        ),
        "Regression needs at least 3 paired values",
    )


@router.post("/anova", response_model=TestResultResponse)
async def anova(request: AnovaRequest):
    table = await load_table(request.csv)
    require_columns(table, [request.group_column])
    require_columns(table, [request.outcome_column], numeric=True)
    return _respond(
        "ANOVA",
        lambda: run_anova(
            table, request.group_column, request.outcome_column, min_rows=settings.MIN_ROWS_FOR_TESTS,
        ),
        "ANOVA needs at least 2 groups with data and within-group variation",
    )
