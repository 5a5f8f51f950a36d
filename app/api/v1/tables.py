"""
Table Endpoints — CSV ingestion and manual schema mode
========================================================
  POST /tables/parse    — CSV text → typed table (columns + rows)
  POST /tables/schema   — declared columns (+ optional rows) → table

Also hosts the request helpers every other workbench router uses:
loading a table from request CSV, column checks, and the 422 shape for
"not computable" results.
"""

import logging
from typing import Any, Dict, List, Sequence

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.core.engine import ColumnKind, Table, parse_csv

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tables", tags=["Workbench — Tables"])


# ═══════════════════════════════════════════════════════════════
# SHARED HELPERS
# ═══════════════════════════════════════════════════════════════

def not_computable(message: str) -> HTTPException:
    return HTTPException(status_code=422, detail={"error": "not_computable", "message": message})


async def load_table(csv_text: str) -> Table:
    """
    Parse request CSV off the event loop.

    413 when the body exceeds MAX_CSV_CHARS, 422 when the text does not
    yield a header plus at least one data row.
    """
    if len(csv_text) > settings.MAX_CSV_CHARS:
        raise HTTPException(
            status_code=413,
            detail={
                "error": "csv_too_large",
                "message": f"CSV text exceeds {settings.MAX_CSV_CHARS} characters",
            },
        )
    table = await run_in_threadpool(parse_csv, csv_text)
    if table.is_empty:
        raise HTTPException(
            status_code=422,
            detail={"error": "unparseable_csv", "message": "CSV needs a header line and at least one data row"},
        )
    logger.info(f"Loaded table: {table.n_rows} rows, {len(table.columns)} columns")
    return table


def require_columns(table: Table, names: Sequence[str], numeric: bool = False) -> None:
    """400 for names missing from the table (or not numeric, when asked)."""
    missing = [n for n in names if not table.has_column(n)]
    if missing:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "unknown_column",
                "message": f"Unknown columns {missing}. Available: {table.column_names}",
            },
        )
    if numeric:
        wrong_kind = [n for n in names if not table.column(n).is_numeric]
        if wrong_kind:
            raise HTTPException(
                status_code=400,
                detail={"error": "not_numeric", "message": f"Columns must be numeric: {wrong_kind}"},
            )


# ═══════════════════════════════════════════════════════════════
# REQUEST / RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════

class CsvRequest(BaseModel):
    csv: str = Field(..., min_length=1, description="Comma-separated text with a header line")


class ColumnModel(BaseModel):
    name: str
    kind: ColumnKind = ColumnKind.NUMERIC


class SchemaRequest(BaseModel):
    columns: List[ColumnModel] = Field(..., min_length=1)
    rows: List[Dict[str, Any]] = []


class TableResponse(BaseModel):
    columns: List[Dict[str, str]] = []
    rows: List[Dict[str, Any]] = []
    n_rows: int = 0


# ═══════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════

@router.post("/parse", response_model=TableResponse)
async def parse_table(request: CsvRequest):
    """Infer column kinds and convert numeric cells."""
    table = await load_table(request.csv)
    return TableResponse(**table.to_dict())


@router.post("/schema", response_model=TableResponse)
async def build_table_from_schema(request: SchemaRequest):
    """
    Manual mode: declare the columns, then append rows one by one.

    Rows are validated against the declared kinds; the first invalid row
    rejects the whole request with 400.
    """
    try:
        table = Table.from_schema([c.model_dump() for c in request.columns])
        for i, values in enumerate(request.rows):
            try:
                table.append_row(values)
            except ValueError as e:
                raise ValueError(f"Row {i + 1}: {e}") from e
    except ValueError as e:
        logger.warning(f"Manual table rejected: {e}")
        raise HTTPException(status_code=400, detail={"error": "invalid_table", "message": str(e)})
    return TableResponse(**table.to_dict())
