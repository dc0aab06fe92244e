"""DTOs para el flujo de reserva y emisión."""

import json
from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.passenger import Passenger
from app.domain.field_lookup import (
    RESERVATION_LOCATOR_PATH,
    TICKET_NUMBER_PATH,
    read_path,
)

PAYLOAD_PREVIEW_LENGTH = 400


@dataclass(frozen=True)
class StageTimeouts:
    """Timeouts independientes por etapa, en milisegundos."""

    login_ms: int
    reserve_ms: int
    issue_ms: int

    def to_dict(self) -> dict[str, int]:
        return {"loginMs": self.login_ms, "reserveMs": self.reserve_ms, "issueMs": self.issue_ms}


@dataclass
class ReserveCommand:
    """
    Entrada del orquestador para crear (y opcionalmente emitir) una reserva.

    ``payload`` es el body tal como llegó, usado para resolver el
    identificador y para el preview de debug; ``passengers`` ya viene
    normalizado.
    """

    payload: dict[str, Any] = field(default_factory=dict)
    passengers: list[Passenger] = field(default_factory=list)
    service_charge: Any = None
    header_identifier: str | None = None
    query_identifier: str | None = None
    force_mock: bool = False
    auto_issue: bool = False


@dataclass
class IssuanceResult:
    locator: str
    ticket_number: str | None
    raw: Any


@dataclass
class ReservationResult:
    locator: str | None
    raw: Any
    request_id: str
    mock: bool = False
    issuance: IssuanceResult | None = None


@dataclass
class DebugSnapshot:
    """
    Diagnóstico de la última ejecución (sobrescrito en cada ejecución).

    ``to_dict`` usa las claves que ya consume el front-end.
    """

    request_id: str
    operation: str
    timeouts: StageTimeouts
    source: str | None = None
    identifier_preview: str | None = None
    payload_preview: str | None = None
    login_ms: int | None = None
    reserve_ms: int | None = None
    issue_ms: int | None = None
    total_ms: int = 0
    reserve_status: int | None = None
    issue_status: int | None = None
    mock: bool = False
    business_code: str | None = None
    business_message: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "reqId": self.request_id,
            "operation": self.operation,
            "source": self.source,
            "selectedIdentPreview": self.identifier_preview,
            "payloadPreview": self.payload_preview,
            "loginDuration": self.login_ms,
            "reserveDuration": self.reserve_ms,
            "issueDuration": self.issue_ms,
            "totalDuration": self.total_ms,
            "reserveStatus": self.reserve_status,
            "issueStatus": self.issue_status,
            "timeouts": self.timeouts.to_dict(),
            "mock": self.mock,
            "businessCode": self.business_code,
            "businessMessage": self.business_message,
            "error": self.error,
        }


def payload_preview(payload: Any, length: int = PAYLOAD_PREVIEW_LENGTH) -> str:
    return json.dumps(payload, default=str, ensure_ascii=False)[:length]


def extract_locator(body: Any) -> str | None:
    """
    Localizador de la reserva: ``Reservas[0].Localizador``.

    Cualquier otra forma es una falla de extracción (``None``), no se intenta
    adivinar en otros campos.
    """
    value = read_path(body, RESERVATION_LOCATOR_PATH)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_ticket_number(body: Any) -> str | None:
    value = read_path(body, TICKET_NUMBER_PATH)
    if value is None or value == "":
        return None
    return str(value)
