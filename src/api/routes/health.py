"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_event_publisher
from adapter.mongodb.connection import get_mongodb_client
from port.event_publisher import EventPublisher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

_HEALTHY = {"status": "healthy", "message": "Connection successful"}
_UNAVAILABLE = {"status": "unhealthy", "message": "Connection failed or not configured"}


def _error(e: Exception) -> dict:
    return {"status": "unhealthy", "message": f"Connection error: {str(e)[:200]}"}


def _check_mongodb() -> dict:
    try:
        mongo_client = get_mongodb_client()
        if not mongo_client:
            return _UNAVAILABLE
        mongo_client.admin.command('ping')
        return _HEALTHY
    except Exception as e:
        logger.warning("MongoDB health check failed", extra={"error": str(e)[:200]})
        return _error(e)


def _check_event_bus(publisher: EventPublisher) -> dict:
    try:
        return _HEALTHY if publisher.ping() else _UNAVAILABLE
    except Exception as e:
        logger.warning("Event bus health check failed", extra={"error": str(e)[:200]})
        return _error(e)


@router.get("")
async def health(publisher: EventPublisher = Depends(get_event_publisher)):
    """Health check endpoint with dependency status."""
    services = {
        "mongodb": _check_mongodb(),
        "redis": _check_event_bus(publisher),
    }
    overall_healthy = all(s["status"] == "healthy" for s in services.values())

    health_status = {
        "status": "healthy" if overall_healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": services,
    }
    status_code = status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(content=health_status, status_code=status_code)
