"""
Statistics Endpoints — Descriptives, correlation matrix, dataset brief
========================================================================
  POST /statistics/describe             — per-column descriptive summaries
  POST /statistics/correlation-matrix   — Pearson matrix over selected columns
  POST /interpretation                  — plain-language dataset brief
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.api.v1.tables import CsvRequest, load_table, not_computable, require_columns
from app.config import settings
from app.core.engine import (
    correlation_matrix,
    describe_table,
    five_number_summary,
    histogram,
    interpret_dataset,
    round2,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Workbench — Statistics"])


# ═══════════════════════════════════════════════════════════════
# REQUEST / RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════

class DescribeRequest(CsvRequest):
    columns: Optional[List[str]] = Field(default=None, description="Numeric columns; default all")
    bins: int = Field(default=5, ge=1, le=50, description="Histogram bins per column")


class DescribeResponse(BaseModel):
    n_rows: int = 0
    summaries: List[Dict[str, Any]] = []
    histograms: Dict[str, List[Dict[str, Any]]] = {}
    box_plots: List[Dict[str, Any]] = []


class CorrelationMatrixRequest(CsvRequest):
    columns: List[str] = Field(..., min_length=2)


class CorrelationMatrixResponse(BaseModel):
    columns: List[str] = []
    matrix: List[List[float]] = []
    n_rows: int = 0
    strongest: Optional[Dict[str, Any]] = None


class InterpretationRequest(CsvRequest):
    correlation_columns: Optional[List[str]] = None
    last_test: Optional[str] = Field(default=None, description="Label of the last test run")


class InterpretationResponse(BaseModel):
    text: str = ""
    findings: List[Dict[str, str]] = []


# ═══════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════

@router.post("/statistics/describe", response_model=DescribeResponse)
async def describe_columns(request: DescribeRequest):
    table = await load_table(request.csv)
    names = request.columns or [c.name for c in table.numeric_columns()]
    require_columns(table, names, numeric=True)
    if not names:
        raise not_computable("Table has no numeric columns")

    try:
        summaries = describe_table(table, names)
        histograms = {
            name: [b.to_dict() for b in histogram(table.numeric_vector(name), request.bins)]
            for name in names
        }
        boxes = [five_number_summary(table.numeric_vector(name), name=name) for name in names]
    except Exception as e:
        logger.error(f"Describe error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})

    return DescribeResponse(
        n_rows=table.n_rows,
        summaries=[s.to_dict() for s in summaries],
        histograms=histograms,
        box_plots=[b.to_dict() for b in boxes if b is not None],
    )


@router.post("/statistics/correlation-matrix", response_model=CorrelationMatrixResponse)
async def get_correlation_matrix(request: CorrelationMatrixRequest):
    """
    Pairwise Pearson r over the selected numeric columns.

    Needs at least two numeric columns and MIN_ROWS_FOR_CORRELATION_MATRIX rows.
    """
    table = await load_table(request.csv)
    require_columns(table, request.columns)

    matrix = correlation_matrix(table, request.columns)
    if len(matrix.columns) < 2:
        raise not_computable("Select at least two numeric columns")
    if table.n_rows < settings.MIN_ROWS_FOR_CORRELATION_MATRIX:
        raise not_computable(
            f"Correlation matrix needs at least {settings.MIN_ROWS_FOR_CORRELATION_MATRIX} rows"
        )

    strongest = matrix.strongest_pair()
    return CorrelationMatrixResponse(
        **matrix.to_dict(),
        strongest={"a": strongest[0], "b": strongest[1], "abs_r": round2(strongest[2])} if strongest else None,
    )


@router.post("/interpretation", response_model=InterpretationResponse)
async def interpret(request: InterpretationRequest):
    table = await load_table(request.csv)
    if request.correlation_columns:
        require_columns(table, request.correlation_columns)

    brief = interpret_dataset(
        table,
        correlation_columns=request.correlation_columns,
        last_test_label=request.last_test,
        low_power_threshold=settings.LOW_POWER_THRESHOLD,
    )
    if brief is None:
        raise not_computable("Interpretation needs at least 3 rows")
    return InterpretationResponse(**brief.to_dict())
