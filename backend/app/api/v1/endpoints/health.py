"""
Health Check Endpoints

- /health/ready - Readiness check: the document store answers a ping
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.database import ping_database
from app.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check document store connectivity"""
    try:
        latency = await ping_database()
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "connection": "failed",
            "error": str(e),
        }
    return {
        "status": "healthy",
        "latency_ms": round(latency, 2),
        "connection": "ok",
    }


@router.get("/ready")
async def readiness_check():
    """Ready to serve traffic when the database is reachable; AI is optional"""
    database = await check_database()
    ready = database["status"] == "healthy"

    body = {
        "status": "ready" if ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": database,
            "ai": {
                "configured": settings.ai_enabled,
                "mode": "ai" if settings.ai_enabled else "fallback",
            },
        },
    }
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body,
    )
