"""
Workbench Service Endpoints
=============================
  GET  /health   — service status, version, uptime
  GET  /demo     — the bundled demo dataset, parsed
"""

import time
from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel

from app.core.engine import DEMO_CSV, parse_csv

router = APIRouter(tags=["Workbench — Service"])

VERSION = "1.0.0"
_start_time = time.time()


class HealthResponse(BaseModel):
    status: str = "healthy"
    components: Dict[str, str] = {}
    version: str = VERSION
    uptime_seconds: float = 0.0


class DemoResponse(BaseModel):
    csv: str
    columns: List[Dict[str, str]] = []
    rows: List[Dict[str, Any]] = []
    n_rows: int = 0


@router.get("/health", response_model=HealthResponse)
async def workbench_health():
    components = {
        "table_parser": "active",
        "descriptive": "active",
        "correlation": "active",
        "hypothesis_tests": "active",
        "interpretation": "active",
    }
    return HealthResponse(
        status="healthy",
        components=components,
        version=VERSION,
        uptime_seconds=round(time.time() - _start_time, 1),
    )


@router.get("/demo", response_model=DemoResponse)
async def demo_dataset():
    """Raw demo CSV plus its parsed table, for a first look without uploading."""
    return DemoResponse(csv=DEMO_CSV, **parse_csv(DEMO_CSV).to_dict())
