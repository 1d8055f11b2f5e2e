"""Liveness and readiness of the stock service."""

import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from estoque import __version__
from estoque.database import engine
from estoque.setores.models import Setor
from estoque.utils.dates import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


class DatabaseCheck(BaseModel):
    status: str
    latency_ms: Optional[float] = None
    setores: int = 0
    error: Optional[str] = None


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    version: str = __version__
    database: DatabaseCheck


def check_database() -> DatabaseCheck:
    """Round trip to the database, counting the sectors users can sign up into."""
    start = time.perf_counter()
    try:
        with Session(engine) as session:
            setores = session.exec(select(func.count()).select_from(Setor)).one()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return DatabaseCheck(status="unhealthy", error=str(e))
    latency = (time.perf_counter() - start) * 1000
    return DatabaseCheck(status="healthy", latency_ms=round(latency, 2), setores=setores)


@router.get("/health", response_model=HealthStatus)
def health_check() -> HealthStatus:
    database = check_database()
    return HealthStatus(
        status=database.status, timestamp=utcnow().isoformat(), database=database
    )


@router.get("/health/ready")
def readiness_check() -> Dict[str, Any]:
    """Ready once the database answers and holds at least one sector."""
    database = check_database()
    if database.status != "healthy":
        raise HTTPException(status_code=503, detail="Database unavailable")
    if database.setores == 0:
        raise HTTPException(status_code=503, detail="No sectors configured")
    return {"status": "ready", "setores": database.setores}
