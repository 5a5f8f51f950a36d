"""
API Router — Combines all endpoint groups under /workbench.

Service:      /api/v1/workbench/{health,demo}
Tables:       /api/v1/workbench/tables/{parse,schema}
Statistics:   /api/v1/workbench/statistics/{describe,correlation-matrix}, /api/v1/workbench/interpretation
Tests:        /api/v1/workbench/tests/{t-test,correlation,regression,anova}
"""

from fastapi import APIRouter

from app.api.v1.workbench import router as workbench_router
from app.api.v1.tables import router as tables_router
from app.api.v1.statistics import router as statistics_router
from app.api.v1.hypothesis import router as hypothesis_router

api_router = APIRouter()

api_router.include_router(workbench_router, prefix="/workbench")
api_router.include_router(tables_router, prefix="/workbench")
api_router.include_router(statistics_router, prefix="/workbench")
api_router.include_router(hypothesis_router, prefix="/workbench")
