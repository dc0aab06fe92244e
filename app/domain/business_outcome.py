"""
Clasificador de resultados de negocio.

El gateway responde HTTP 200 incluso para fallas de negocio (sesión expirada,
excepción lanzada, reserva sin resultados). Este módulo decide, a partir del
body ya parseado, si la respuesta es un éxito real o un error de negocio.
Es puro: no hace I/O ni depende del status HTTP.
"""

from dataclasses import dataclass
from typing import Any, Literal

from app.domain.field_lookup import (
    BUSINESS_CODE_FIELDS,
    BUSINESS_MESSAGE_FIELDS,
    first_text,
)

OutcomeKind = Literal["reservation", "issuance"]

GENERIC_BUSINESS_MESSAGE = "Erro de negócio"


@dataclass(frozen=True)
class Success:
    is_success = True


@dataclass(frozen=True)
class BusinessFailure:
    code: str | None
    message: str

    is_success = False


Outcome = Success | BusinessFailure


def _reservations_missing(body: dict[str, Any]) -> bool:
    if "Reservas" not in body:
        return False
    reservations = body["Reservas"]
    return reservations is None or (isinstance(reservations, list) and not reservations)


def _is_business_error(body: dict[str, Any], kind: OutcomeKind) -> bool:
    if body.get("SessaoExpirada") is True:
        return True
    if body.get("Exception"):
        return True
    if kind == "reservation" and _reservations_missing(body):
        return True
    if kind == "issuance" and (body.get("error") is True or body.get("Error") is True):
        return True
    return False


def classify(body: Any, kind: OutcomeKind = "reservation") -> Outcome:
    """
    Classify a nominally successful gateway response.

    Args:
        body: Parsed JSON body of a 2xx response.
        kind: ``"reservation"`` also treats a null/empty ``Reservas`` as a
            failure; ``"issuance"`` also honours boolean ``error`` flags.

    Returns:
        ``Success()`` or ``BusinessFailure(code, message)``.
    """
    if not isinstance(body, dict) or not _is_business_error(body, kind):
        return Success()

    code = first_text(body, BUSINESS_CODE_FIELDS)
    message = first_text(body, BUSINESS_MESSAGE_FIELDS) or GENERIC_BUSINESS_MESSAGE
    return BusinessFailure(code=code, message=message)
