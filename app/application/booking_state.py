"""Estado mutable por instancia del orquestador (último flight, fallback, debug)."""

from datetime import datetime
from typing import Any

from app.application.dtos.booking_dto import DebugSnapshot
from app.application.interfaces.clock import Clock, SystemClock
from app.domain.errors import ValidationError

MIN_FALLBACK_IDENTIFIER_LENGTH = 20


class BookingState:
    """
    Valores de último escritor gana, compartidos por todas las requests.

    No es un global de módulo: cada orquestador recibe su propia instancia,
    así los tests arrancan siempre de un estado vacío.
    """

    def __init__(self, fallback_identifier: str | None = None, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._fallback_identifier = fallback_identifier or None
        self._last_snapshot: DebugSnapshot | None = None
        self._last_flight_body: Any = None
        self._last_flight_updated_at: datetime | None = None

    @property
    def fallback_identifier(self) -> str | None:
        return self._fallback_identifier

    def set_fallback_identifier(self, value: str | None) -> str:
        value = (value or "").strip()
        if len(value) < MIN_FALLBACK_IDENTIFIER_LENGTH:
            raise ValidationError(
                field="IdentificacaoDaViagem",
                message=f"informe um valor com pelo menos {MIN_FALLBACK_IDENTIFIER_LENGTH} caracteres",
            )
        self._fallback_identifier = value
        return value

    @property
    def last_snapshot(self) -> DebugSnapshot | None:
        return self._last_snapshot

    def record_snapshot(self, snapshot: DebugSnapshot) -> None:
        self._last_snapshot = snapshot

    @property
    def last_flight_body(self) -> Any:
        return self._last_flight_body

    @property
    def last_flight_updated_at(self) -> datetime | None:
        return self._last_flight_updated_at

    def set_last_flight_body(self, body: Any) -> datetime:
        self._last_flight_body = body
        self._last_flight_updated_at = self._clock.now()
        return self._last_flight_updated_at
