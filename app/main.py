import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.dependencies import get_offer_store
from app.api.middleware import BodySizeLimitMiddleware
from app.api.routers.flight import router as flight_router
from app.api.routers.health import router as health_router
from app.api.routers.offers import router as offers_router
from app.api.routers.reservations import router as reservations_router
from app.api.routers.tickets import router as tickets_router
from app.config import get_settings
from app.domain.errors import DomainError
from app.infrastructure.circuit_breaker import configure_gateway_breaker

settings = get_settings()

# Log format shared by every module logger
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_gateway_breaker(settings.breaker_fail_max, settings.breaker_reset_timeout)
    logger.info(
        "Flight booking API started",
        extra={
            "gateway_base_url": settings.gateway_base_url,
            "credentials_configured": bool(settings.gateway_email and settings.gateway_password),
            "login_timeout_ms": settings.login_timeout_ms,
            "reserve_timeout_ms": settings.reserve_timeout_ms,
            "issue_timeout_ms": settings.issue_timeout_ms,
        },
    )
    yield
    # Cleanup: pending offer sweeps
    get_offer_store().close()

app = FastAPI(
    title="Flight Booking API",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    BodySizeLimitMiddleware,
    max_body_bytes=settings.max_body_bytes,
    path_limits={
        "/flight": settings.flight_max_body_bytes,
        "/api/flight": settings.flight_max_body_bytes,
    },
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Renders domain errors as {"error": code, "message": ..., **details}."""
    logger.info(
        "Domain error",
        extra={"path": request.url.path, "code": exc.code, "status_code": exc.http_status},
    )
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.code, "message": exc.message, **exc.details()},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "INVALID_BODY",
            "message": "Corpo da requisição inválido.",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Último recurso: el stack trace queda en el log, el cliente solo recibe
    un ``errorId`` para correlacionar.
    """
    error_id = uuid.uuid4().hex[:12]
    logger.error(
        "Unexpected failure while handling request",
        exc_info=exc,
        extra={"error_id": error_id, "path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Erro interno inesperado.",
            "errorId": error_id,
        },
    )


# Same routes under /api for the front-end proxy; documented once.
for prefix in ("", "/api"):
    app.include_router(health_router, prefix=prefix, tags=["Health"], include_in_schema=not prefix)
    app.include_router(reservations_router, prefix=prefix, tags=["Reservations"], include_in_schema=not prefix)
    app.include_router(flight_router, prefix=prefix, tags=["Flight"], include_in_schema=not prefix)
    app.include_router(offers_router, prefix=prefix, tags=["Offers"], include_in_schema=not prefix)
    app.include_router(tickets_router, prefix=prefix, tags=["Tickets"], include_in_schema=not prefix)
