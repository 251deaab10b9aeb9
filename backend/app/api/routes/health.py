from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import engine

router = APIRouter()
logger = logging.getLogger(__name__)

# Tables the analytics reads cannot run without.
REQUIRED_TABLES = frozenset(
    {
        "courses",
        "course_sections",
        "course_section_schedules",
        "lecturers",
        "students",
        "student_registered_courses",
        "venues",
        "users",
    }
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def probe_database() -> dict:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            present = set(inspect(connection).get_table_names())
    except SQLAlchemyError as exc:
        logger.warning("Readiness probe could not reach the database: %s", exc)
        return {"ok": False, "schema_ok": False, "missing_tables": sorted(REQUIRED_TABLES), "error": str(exc)}
    missing = sorted(REQUIRED_TABLES - present)
    return {"ok": True, "schema_ok": not missing, "missing_tables": missing, "error": None}


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": _now()}


@router.get("/health/ready")
def health_ready() -> JSONResponse:
    database = probe_database()
    ready = database["ok"] and database["schema_ok"]
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ok" if ready else "degraded", "timestamp": _now(), "database": database},
    )
