from fastapi import APIRouter, HTTPException

from swapstreet.core.config import settings
from swapstreet.database import check_database_health
from swapstreet.utils.time_utils import utc_now

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Application health check endpoint"""
    db_health = await check_database_health()

    return {
        "status": "healthy" if db_health["overall"] else "unhealthy",
        "timestamp": utc_now(),
        "databases": {
            "postgres": "connected" if db_health["postgres"] else "disconnected"
        },
        "service": settings.app_name,
        "version": settings.version
    }


@router.get("/health/ready")
async def readiness_check():
    """Kubernetes readiness probe endpoint"""
    db_health = await check_database_health()

    if not db_health["overall"]:
        raise HTTPException(
            status_code=503,
            detail="Service not ready - database connection failed"
        )

    return {"status": "ready"}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes liveness probe endpoint"""
    return {"status": "alive", "timestamp": utc_now()}
