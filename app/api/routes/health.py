"""Health check endpoint."""
from typing import Any

from fastapi import APIRouter, HTTPException

from app.db.session import check_db_connection

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Health check with database connectivity.
    Returns 503 if database is unreachable.
    """
    if not check_db_connection():
        raise HTTPException(
            status_code=503,
            detail={"status": "degraded", "db": "error"},
        )
    return {"status": "ok", "db": "ok"}
