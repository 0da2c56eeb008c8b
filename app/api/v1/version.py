"""
Version and metadata endpoint
"""
from fastapi import APIRouter
from app.api.v1.health import SERVICE_NAME
from app.core.config import settings

router = APIRouter()


@router.get("/version")
async def get_version():
    """
    Get application version and metadata

    Returns:
        Version information including service name, version, environment and paid-leave cap
    """
    return {
        "service": SERVICE_NAME,
        "version": settings.VERSION or "1.0.0",
        "env": settings.APP_ENV,
        "monthly_paid_leave_cap": settings.MONTHLY_PAID_LEAVE_CAP,
    }
