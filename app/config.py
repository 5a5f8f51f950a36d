"""
Application Settings — All via environment variables with sensible defaults.
"""
import os


class Settings:
    # ── Server ──
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8002"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # ── CORS ──
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,*")

    # ── Upload guard: CSV bodies longer than this are rejected (413) ──
    MAX_CSV_CHARS: int = int(os.getenv("MAX_CSV_CHARS", str(5 * 1024 * 1024)))

    # ── Analysis thresholds ──
    MIN_ROWS_FOR_TESTS: int = int(os.getenv("MIN_ROWS_FOR_TESTS", "3"))
    MIN_ROWS_FOR_CORRELATION_MATRIX: int = int(os.getenv("MIN_ROWS_FOR_CORRELATION_MATRIX", "5"))
    LOW_POWER_THRESHOLD: int = int(os.getenv("LOW_POWER_THRESHOLD", "30"))


settings = Settings()
