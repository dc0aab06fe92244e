import logging
import re
import time
from contextlib import contextmanager
from typing import Any, Iterator

from app.application.booking_state import BookingState
from app.application.dtos.booking_dto import (
    DebugSnapshot,
    IssuanceResult,
    ReservationResult,
    ReserveCommand,
    StageTimeouts,
    extract_locator,
    extract_ticket_number,
    payload_preview,
)
from app.application.interfaces.booking_gateway import (
    BookingGateway,
    Credentials,
    GatewayResponse,
)
from app.application.interfaces.id_generator import IdGenerator
from app.domain.business_outcome import BusinessFailure, classify
from app.domain.errors import (
    BusinessError,
    DomainError,
    MalformedUpstreamResponseError,
    MissingCredentialsError,
    MissingIdentifierError,
    MissingLocatorError,
    UpstreamHttpError,
)
from app.domain.field_lookup import (
    RETURN_TRIP_IDENTIFIER_FIELDS,
    TRIP_IDENTIFIER_FIELDS,
    first_text,
)
from app.domain.value_objects.trip_identifier import TripIdentifier, preview

logger = logging.getLogger(__name__)

MOCK_LOCATOR_LENGTH = 6
MOCK_LOCATOR_DEFAULT = "PNRMOCK"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def build_mock_reservation(request_id: str) -> dict[str, Any]:
    """Respuesta fabricada para el modo mock; misma forma que una reserva real."""
    locator = re.sub(r"[^A-Za-z0-9]", "", request_id).upper()[:MOCK_LOCATOR_LENGTH] or MOCK_LOCATOR_DEFAULT
    return {
        "Reservas": [{"Localizador": locator, "CodigoReserva": locator}],
        "Mensagem": "MOCK_OK",
        "_mock": True,
    }


class BookingOrchestrator:
    """
    Secuencia login -> reserva -> (emisión) contra el gateway de reservas.

    Cada ejecución obtiene un token nuevo, usa timeouts independientes por
    etapa y deja exactamente un snapshot de debug en ``BookingState``.
    Las fallas de negocio que el gateway devuelve con HTTP 200 se convierten
    en ``BusinessError``. Nada se reintenta.
    """

    def __init__(
        self,
        gateway: BookingGateway,
        credentials: Credentials,
        timeouts: StageTimeouts,
        state: BookingState,
        id_generator: IdGenerator,
        force_mock: bool = False,
    ) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self._timeouts = timeouts
        self._state = state
        self._id_generator = id_generator
        self._force_mock = force_mock

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def timeouts(self) -> StageTimeouts:
        return self._timeouts

    def check_readiness(self) -> dict[str, Any]:
        """Verificación sin red: credenciales cargadas y fallback disponible."""
        if not self._credentials.is_configured:
            raise MissingCredentialsError()
        return {
            "ok": True,
            "hasEmail": True,
            "hasPassword": True,
            "hasFallbackIdentificacao": bool(self._state.fallback_identifier),
            "timeouts": self._timeouts.to_dict(),
        }

    def resolve_trip_identifier(self, command: ReserveCommand) -> TripIdentifier | None:
        """
        First non-empty identifier wins: payload, last flight body, header,
        query parameter, process-wide fallback.
        """
        return_value = first_text(command.payload, RETURN_TRIP_IDENTIFIER_FIELDS)
        candidates = (
            ("payload", first_text(command.payload, TRIP_IDENTIFIER_FIELDS)),
            ("lastFlightBody", first_text(self._state.last_flight_body, TRIP_IDENTIFIER_FIELDS)),
            ("header", command.header_identifier),
            ("query", command.query_identifier),
            ("fallback", self._state.fallback_identifier),
        )
        for source, value in candidates:
            if value:
                return TripIdentifier(value=value, source=source, return_value=return_value)
        return None

    async def reserve(self, command: ReserveCommand) -> ReservationResult:
        operation = "reserve_and_issue" if command.auto_issue else "reserve"
        with self._recording(operation) as snapshot:
            self._require_credentials()
            trip = self.resolve_trip_identifier(command)
            self._describe(snapshot, command, trip)

            # El modo mock solo aplica a la reserva simple.
            if not command.auto_issue and (command.force_mock or self._force_mock):
                return self._mock_reservation(snapshot)

            if trip is None:
                raise MissingIdentifierError()

            token = await self._login(snapshot)
            return await self._reserve_then_maybe_issue(snapshot, token, trip, command)

    async def issue(self, locator: str | None) -> IssuanceResult:
        locator = (locator or "").strip()
        with self._recording("issue") as snapshot:
            if not locator:
                raise MissingLocatorError()
            self._require_credentials()
            token = await self._login(snapshot)
            return await self._issue(snapshot, token, locator)

    async def reserve_and_issue(
        self, command: ReserveCommand, locator: str | None = None
    ) -> ReservationResult:
        """
        Emite directo si ya hay localizador; si no, reserva y emite con el
        localizador extraído. Un solo login para ambas etapas.
        """
        locator = (locator or "").strip() or None
        if locator is None:
            command.auto_issue = True
            return await self.reserve(command)

        with self._recording("issue") as snapshot:
            self._require_credentials()
            token = await self._login(snapshot)
            issuance = await self._issue(snapshot, token, locator)
            return ReservationResult(
                locator=locator,
                raw=None,
                request_id=snapshot.request_id,
                issuance=issuance,
            )

    # ------------------------------------------------------------------

    @contextmanager
    def _recording(self, operation: str) -> Iterator[DebugSnapshot]:
        snapshot = DebugSnapshot(
            request_id=self._id_generator.generate_request_id(),
            operation=operation,
            timeouts=self._timeouts,
        )
        started = time.perf_counter()
        logger.info(
            "Booking run started",
            extra={"request_id": snapshot.request_id, "operation": operation},
        )
        try:
            yield snapshot
        except BusinessError as exc:
            snapshot.error = exc.code
            snapshot.business_code = exc.business_code
            snapshot.business_message = exc.business_message
            snapshot.total_ms = _elapsed_ms(started)
            exc.debug = snapshot.to_dict()
            raise
        except DomainError as exc:
            snapshot.error = exc.code
            raise
        finally:
            snapshot.total_ms = _elapsed_ms(started)
            self._state.record_snapshot(snapshot)
            logger.info(
                "Booking run finished",
                extra={
                    "request_id": snapshot.request_id,
                    "operation": operation,
                    "total_ms": snapshot.total_ms,
                    "error": snapshot.error,
                },
            )

    def _require_credentials(self) -> None:
        if not self._credentials.is_configured:
            raise MissingCredentialsError()

    def _describe(
        self, snapshot: DebugSnapshot, command: ReserveCommand, trip: TripIdentifier | None
    ) -> None:
        snapshot.source = trip.source if trip else None
        snapshot.identifier_preview = trip.preview if trip else preview(None)
        snapshot.payload_preview = payload_preview(command.payload)

        for index, passenger in enumerate(command.passengers):
            if not passenger.is_complete:
                # Se reenvía igual: el gateway decide si rechaza.
                logger.warning(
                    "Passenger with missing fields",
                    extra={
                        "request_id": snapshot.request_id,
                        "passenger_index": index,
                        "missing": passenger.missing,
                    },
                )

    def _mock_reservation(self, snapshot: DebugSnapshot) -> ReservationResult:
        body = build_mock_reservation(snapshot.request_id)
        snapshot.mock = True
        snapshot.login_ms = 0
        snapshot.reserve_ms = 0
        snapshot.reserve_status = 200
        logger.info("Mock reservation returned", extra={"request_id": snapshot.request_id})
        return ReservationResult(
            locator=extract_locator(body),
            raw=body,
            request_id=snapshot.request_id,
            mock=True,
        )

    async def _login(self, snapshot: DebugSnapshot) -> str:
        started = time.perf_counter()
        try:
            return await self._gateway.login(self._credentials, self._timeouts.login_ms)
        finally:
            snapshot.login_ms = _elapsed_ms(started)
            logger.info(
                "Login finished",
                extra={"request_id": snapshot.request_id, "duration_ms": snapshot.login_ms},
            )

    async def _reserve_then_maybe_issue(
        self,
        snapshot: DebugSnapshot,
        token: str,
        trip: TripIdentifier,
        command: ReserveCommand,
    ) -> ReservationResult:
        started = time.perf_counter()
        try:
            response = await self._gateway.reserve(
                token,
                trip,
                list(command.passengers),
                self._timeouts.reserve_ms,
                service_charge=command.service_charge,
            )
        finally:
            snapshot.reserve_ms = _elapsed_ms(started)

        snapshot.reserve_status = response.status_code
        logger.info(
            "Reservation response received",
            extra={
                "request_id": snapshot.request_id,
                "status_code": response.status_code,
                "duration_ms": snapshot.reserve_ms,
            },
        )
        self._raise_for_outcome("reserve", response)

        locator = extract_locator(response.body)
        result = ReservationResult(locator=locator, raw=response.body, request_id=snapshot.request_id)
        if not command.auto_issue:
            return result

        if locator is None:
            raise MalformedUpstreamResponseError(
                message="Localizador ausente na resposta da reserva",
                body=response.body,
                code="MISSING_LOCATOR_FROM_RESERVE",
            )
        result.issuance = await self._issue(snapshot, token, locator)
        return result

    async def _issue(self, snapshot: DebugSnapshot, token: str, locator: str) -> IssuanceResult:
        started = time.perf_counter()
        try:
            response = await self._gateway.issue(token, locator, self._timeouts.issue_ms)
        finally:
            snapshot.issue_ms = _elapsed_ms(started)

        snapshot.issue_status = response.status_code
        logger.info(
            "Issuance response received",
            extra={
                "request_id": snapshot.request_id,
                "locator": locator,
                "status_code": response.status_code,
                "duration_ms": snapshot.issue_ms,
            },
        )
        self._raise_for_outcome("issue", response, locator=locator)
        return IssuanceResult(
            locator=locator,
            ticket_number=extract_ticket_number(response.body),
            raw=response.body,
        )

    def _raise_for_outcome(
        self, stage: str, response: GatewayResponse, locator: str | None = None
    ) -> None:
        if not response.is_success:
            raise UpstreamHttpError(stage=stage, status=response.status_code, body=response.body)

        outcome = classify(response.body, "reservation" if stage == "reserve" else "issuance")
        if isinstance(outcome, BusinessFailure):
            logger.warning(
                "Business error in upstream response",
                extra={"stage": stage, "business_code": outcome.code, "locator": locator},
            )
            raise BusinessError(
                business_code=outcome.code,
                business_message=outcome.message,
                data=response.body,
                stage=stage,
                locator=locator,
            )

        if not isinstance(response.body, dict):
            raise MalformedUpstreamResponseError(
                message=f"{stage} response is not a JSON object",
                body=response.body,
            )

