"""
Health and configuration endpoints.

- /health: Basic liveness check (always returns 200)
- /health/live: Alias for orchestrators that prefer that name
- /config: Configuration summary for troubleshooting (never the secrets)
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_booking_state
from app.application.booking_state import BookingState
from app.config import Settings, get_settings
from app.domain.value_objects.trip_identifier import preview
from app.infrastructure.circuit_breaker import gateway_breaker

router = APIRouter()

SERVICE_NAME = "flight-booking-api"


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running. The booking gateway is
    not contacted.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/config")
async def config_summary(
    settings: Settings = Depends(get_settings),
    state: BookingState = Depends(get_booking_state),
):
    fallback = state.fallback_identifier
    return {
        "larianBase": settings.gateway_base_url,
        "hasEmail": bool(settings.gateway_email),
        "hasPassword": bool(settings.gateway_password),
        "hasFallbackIdentificacao": bool(fallback),
        "fallbackPreview": preview(fallback) if fallback else None,
        "forceMock": settings.force_mock,
        "offerTtlSeconds": settings.offer_ttl_seconds,
        "circuitBreaker": gateway_breaker.current_state,
        "timeouts": {
            "loginMs": settings.login_timeout_ms,
            "reserveMs": settings.reserve_timeout_ms,
            "issueMs": settings.issue_timeout_ms,
            "initiateMs": settings.initiate_timeout_ms,
        },
    }
