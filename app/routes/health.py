"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from app.core.deps import get_store
from app.services.storage import BaseStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(request: Request):
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    config = request.app.state.settings
    return {
        "status": "healthy",
        "service": config.APP_NAME,
        "version": config.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/store")
def store_health(store: BaseStore = Depends(get_store)):
    """
    Store connectivity check.
    Performs a lightweight read against the configured backend.
    """
    try:
        store.ping()
    except Exception as e:
        logger.error(f"Store health check failed: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Store connection failed")

    return {
        "status": "healthy",
        "store": type(store).__name__,
        "connected": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
