# backend/app/routes/health.py
"""
Health check endpoint for monitoring and load balancers.
"""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter

from ..core.config import settings
from ..core.constants import API_VERSION, BRAND_NAME
from ..schemas.main_responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns basic health status including service info and environment.
    """
    return HealthResponse(
        status="healthy",
        service=f"{BRAND_NAME.lower()}-api",
        version=API_VERSION,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
