"""Health check endpoint for monitoring application status.
"""
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from stockboard.core.config import Settings, get_settings
from stockboard.core.docs import API_VERSION

router = APIRouter()


def _configuration_checks(settings: Settings) -> dict[str, dict[str, str]]:
    """Check that each configured backend has the credentials it needs."""
    checks: dict[str, dict[str, str]] = {}

    if settings.market_data_provider == "live":
        if settings.finnhub_api_key:
            checks["market_data"] = {"status": "healthy", "message": "Finnhub API key configured"}
        else:
            checks["market_data"] = {
                "status": "unhealthy",
                "message": "FINNHUB_API_KEY is not configured",
            }
    else:
        checks["market_data"] = {
            "status": "healthy",
            "message": f"Using {settings.market_data_provider} market data provider",
        }

    if settings.auth_backend == "supabase":
        if settings.supabase_url and settings.supabase_service_role_key:
            checks["identity"] = {"status": "healthy", "message": "Supabase configured"}
        else:
            checks["identity"] = {
                "status": "unhealthy",
                "message": "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set",
            }
    else:
        checks["identity"] = {
            "status": "healthy",
            "message": f"Using {settings.auth_backend} identity backend",
        }

    return checks


@router.get(
    "/health",
    response_model=dict[str, Any],
    summary="Comprehensive Health Check",
    description="Returns application status and whether the configured market data "
    "and identity backends have the credentials they need.",
    operation_id="get_health_status",
    responses={
        200: {"description": "Service is healthy"},
        503: {
            "description": "Service is unhealthy",
            "content": {
                "application/json": {
                    "example": {
                        "status": "unhealthy",
                        "timestamp": "2025-10-02T10:00:00+00:00",
                        "version": "1.0.0",
                        "environment": "production",
                        "checks": {
                            "application": {"status": "healthy", "message": "Application ready"},
                            "market_data": {
                                "status": "unhealthy",
                                "message": "FINNHUB_API_KEY is not configured",
                            },
                        },
                    }
                }
            },
        },
    },
)
async def health_check(settings: Settings = Depends(get_settings)) -> Any:
    """Comprehensive health check endpoint.

    Returns:
        Health status information, with status 503 if any check fails
    """
    checks = {"application": {"status": "healthy", "message": "Application ready"}}
    checks.update(_configuration_checks(settings))

    healthy = all(check["status"] == "healthy" for check in checks.values())
    health_data = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
        "environment": settings.environment,
        "checks": checks,
    }

    if not healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_data)

    return health_data


@router.get(
    "/health/ready",
    response_model=dict[str, str],
    summary="Readiness Probe",
    description="Simple readiness check for load balancers and orchestration systems. "
    "Returns 200 OK when the application is ready to serve traffic.",
    operation_id="get_readiness",
)
async def readiness_check() -> dict[str, str]:
    """Simple readiness check for load balancer probes."""
    return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get(
    "/health/live",
    response_model=dict[str, str],
    summary="Liveness Probe",
    description="Simple liveness check for container orchestration. "
    "Returns 200 OK when the application process is alive.",
    operation_id="get_liveness",
)
async def liveness_check() -> dict[str, str]:
    """Simple liveness check for container orchestration."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}
