"""
Statistical Workbench Engine — FastAPI Server (Port 8002)
===========================================================
CSV ingestion with schema inference, descriptive statistics, correlation
matrices, and classical hypothesis tests (Welch t, Pearson r, OLS, ANOVA)
with exact p-values.

Run:
  uvicorn main:app --host 0.0.0.0 --port 8002 --reload
  # or
  python main.py
"""

import logging
from contextlib import asynccontextmanager

# Load .env file BEFORE anything reads os.getenv()
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from app.config import settings  # noqa: E402

# ── Logging ──
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("workbench")


# ── Lifespan: warm up ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    from app.core.engine import DEMO_CSV, parse_csv, run_t_test

    try:
        demo = parse_csv(DEMO_CSV)
        warm = run_t_test(demo, "group", "score", "A", "B")
        logger.info(
            f"Engine warmed up: demo table {demo.n_rows}×{len(demo.columns)}, "
            f"t-test {'ready' if warm else 'unavailable'}"
        )
    except Exception as e:
        logger.warning(f"Engine warmup failed: {e}", exc_info=True)

    yield
    logger.info("Shutting down Statistical Workbench Engine")


# ── Create FastAPI app ──
app = FastAPI(
    title="Statistical Workbench Engine",
    description=(
        "Stateless statistics service: CSV parsing with column-kind inference, "
        "descriptive statistics, Pearson correlation matrices, Welch t-test, "
        "correlation test, simple OLS regression and one-way ANOVA with p-values "
        "from the incomplete beta function."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Mount all API routes ──
from app.api.router import api_router  # noqa: E402
app.include_router(api_router, prefix="/api/v1")


# ── Root ──
@app.get("/", tags=["Root"])
async def root():
    return {
        "service": "Statistical Workbench Engine",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "tables": "/api/v1/workbench/tables/ (2 endpoints)",
            "statistics": "/api/v1/workbench/statistics/ (2 endpoints) + /interpretation",
            "tests": "/api/v1/workbench/tests/ (4 endpoints)",
        },
        "health": "/api/v1/workbench/health",
    }


# ── Direct run ──
if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=os.getenv("RELOAD", "true").lower() == "true",
        log_level="info",
    )
