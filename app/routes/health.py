"""
Health check routes for load balancers and monitoring.
"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Dict, Any

from ..config import get_settings
from ..database import get_db
from ..logging_config import db_logger

settings = get_settings()

router = APIRouter(prefix="/api/health", tags=["health"])


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity"""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy"}
    except SQLAlchemyError as e:
        db_logger.error("Database health check failed", error=e)
        return {"status": "unhealthy", "error": str(e)}


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """Overall service health."""
    database = check_database(db)
    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "environment": settings.environment,
        "version": settings.version,
        "database": database,
    }
