import asyncio
import logging
import time
from typing import Any
from urllib.parse import quote

import httpx
from pybreaker import CircuitBreaker

from app.application.interfaces.booking_gateway import (
    BookingGateway,
    Credentials,
    GatewayResponse,
)
from app.domain.entities.passenger import Passenger
from app.domain.errors import (
    AuthMalformedError,
    AuthRejectedError,
    AuthTimeoutError,
    AuthTransportError,
    GatewayUnavailableError,
    IssueTimeoutError,
    IssueTransportError,
    ReserveTimeoutError,
    ReserveTransportError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from app.domain.field_lookup import TOKEN_FIELDS, first_text
from app.domain.value_objects.trip_identifier import TripIdentifier
from app.infrastructure.circuit_breaker import CircuitBreakerError, gateway_breaker

logger = logging.getLogger(__name__)

DEFAULT_INITIATE_TIMEOUT_MS = 10000
LOG_BODY_LENGTH = 400
CARD_PAYMENT_METHOD = 1

_STAGE_ERRORS: dict[str, tuple[type[UpstreamTimeoutError], type[UpstreamTransportError]]] = {
    "login": (AuthTimeoutError, AuthTransportError),
    "reserve": (ReserveTimeoutError, ReserveTransportError),
    "issue": (IssueTimeoutError, IssueTransportError),
}


def parse_body(response: httpx.Response) -> Any:
    """JSON del body, o ``{"raw": text}`` si no es JSON."""
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


class HttpBookingGateway(BookingGateway):
    def __init__(
        self,
        base_url: str,
        initiate_timeout_ms: int = DEFAULT_INITIATE_TIMEOUT_MS,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        """
        HTTP client for the booking gateway.

        Every call opens its own ``httpx.AsyncClient`` with its own timeout and
        is additionally bounded by ``asyncio.wait_for`` so a slow body can not
        outlive the stage deadline.

        Args:
            base_url: Base URL of the gateway API (e.g. ``https://host/api/v1``)
            initiate_timeout_ms: Deadline of the best-effort initiate call
            breaker: Circuit breaker guarding login/reserve/issue
        """
        self._base_url = base_url.rstrip("/")
        self._initiate_timeout_ms = initiate_timeout_ms
        self._breaker = breaker or gateway_breaker

    async def login(self, credentials: Credentials, timeout_ms: int) -> str:
        response = await self._post(
            "login",
            f"{self._base_url}/login",
            timeout_ms,
            payload={"email": credentials.email, "password": credentials.password},
        )
        if not response.is_success:
            logger.warning(
                "Login rejected by gateway",
                extra={"status_code": response.status_code, "body": response.text[:LOG_BODY_LENGTH]},
            )
            raise AuthRejectedError(response.status_code, response.body)

        token = first_text(response.body, TOKEN_FIELDS)
        if not token:
            raise AuthMalformedError(response.body)
        logger.debug("Login token received", extra={"token_length": len(token)})
        return token

    async def reserve(
        self,
        token: str,
        trip: TripIdentifier,
        passengers: list[Passenger],
        timeout_ms: int,
        service_charge: Any = None,
    ) -> GatewayResponse:
        payload: dict[str, Any] = {
            "IdentificacaoDaViagem": trip.value,
            "passengers": [passenger.to_upstream() for passenger in passengers],
        }
        if trip.return_value:
            payload["IdentificacaoDaViagemVolta"] = trip.return_value
        if service_charge:
            payload["CobrancaDeServico"] = service_charge

        logger.info(
            "Creating reservation",
            extra={"trip": trip.preview, "source": trip.source, "passengers": len(passengers)},
        )
        return await self._post(
            "reserve",
            f"{self._base_url}/travellink/reservations",
            timeout_ms,
            payload=payload,
            token=token,
        )

    async def issue(self, token: str, locator: str, timeout_ms: int) -> GatewayResponse:
        await self._initiate(token, locator)
        return await self._post(
            "issue",
            f"{self._base_url}/travellink/issuance",
            timeout_ms,
            payload={
                "Localizador": locator,
                "Pagamento": {"FormaDePagamento": CARD_PAYMENT_METHOD},
            },
            token=token,
        )

    async def _initiate(self, token: str, locator: str) -> None:
        """Best-effort: any failure is logged and the issuance proceeds."""
        url = f"{self._base_url}/travellink/issuance/{quote(locator, safe='')}:initiate"
        try:
            response = await asyncio.wait_for(
                self._send(url, None, token, self._initiate_timeout_ms / 1000),
                timeout=self._initiate_timeout_ms / 1000,
            )
        except Exception as exc:
            logger.warning(
                "Issuance initiate failed, continuing",
                extra={"locator": locator, "error": repr(exc)},
            )
            return
        if not response.is_success:
            logger.warning(
                "Issuance initiate returned non-2xx, continuing",
                extra={"locator": locator, "status_code": response.status_code},
            )

    async def _send(
        self, url: str, payload: dict[str, Any] | None, token: str | None, timeout_seconds: float
    ) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds)) as client:
            return await client.post(url, json=payload, headers=headers)

    async def _post(
        self,
        stage: str,
        url: str,
        timeout_ms: int,
        payload: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> GatewayResponse:
        timeout_error, transport_error = _STAGE_ERRORS[stage]
        timeout_seconds = timeout_ms / 1000
        started = time.perf_counter()

        try:
            with self._breaker.calling():
                response = await asyncio.wait_for(
                    self._send(url, payload, token, timeout_seconds),
                    timeout=timeout_seconds,
                )
        except CircuitBreakerError as exc:
            logger.error(
                "Booking gateway circuit breaker is open - service unavailable",
                extra={"stage": stage, "circuit_state": str(exc)},
            )
            raise GatewayUnavailableError(stage) from exc
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.warning(
                "Booking gateway request timeout",
                extra={"stage": stage, "timeout_ms": timeout_ms},
            )
            raise timeout_error(timeout_ms) from exc
        except httpx.RequestError as exc:
            logger.error(
                "Booking gateway transport error",
                exc_info=exc,
                extra={"stage": stage, "url": url},
            )
            raise transport_error(str(exc) or exc.__class__.__name__) from exc

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "Booking gateway responded",
            extra={
                "stage": stage,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
                "body": response.text[:LOG_BODY_LENGTH],
            },
        )
        return GatewayResponse(
            status_code=response.status_code,
            body=parse_body(response),
            text=response.text,
            elapsed_ms=elapsed_ms,
        )
