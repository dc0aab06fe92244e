"""
Estado compartido que alimenta la resolución del identificador de viaje.

- /flight: último body de vuelo recibido (fuente ``lastFlightBody``)
- /identificacao: identificador de respaldo (fuente ``fallback``), usado por
  automatizaciones externas para rotar el valor sin reiniciar el proceso
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api.dependencies import get_booking_state
from app.application.booking_state import BookingState
from app.domain.field_lookup import FALLBACK_IDENTIFIER_INPUT_FIELDS, first_value
from app.domain.value_objects.trip_identifier import preview

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/flight", status_code=status.HTTP_200_OK)
async def get_flight(state: BookingState = Depends(get_booking_state)) -> dict:
    if state.last_flight_body is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Nenhum corpo de voo foi recebido ainda.",
        )
    updated_at = state.last_flight_updated_at
    return {
        **state.last_flight_body,
        "_meta": {"lastUpdatedAt": updated_at.isoformat() if updated_at else None},
    }


@router.post("/flight", status_code=status.HTTP_200_OK)
async def post_flight(
    payload: dict[str, Any] = Body(...),
    state: BookingState = Depends(get_booking_state),
) -> dict:
    updated_at = state.set_last_flight_body(payload)
    logger.info("Flight body stored", extra={"keys": len(payload)})
    return {"ok": True, "lastUpdatedAt": updated_at.isoformat()}


@router.get("/identificacao", status_code=status.HTTP_200_OK)
async def get_fallback_identifier(state: BookingState = Depends(get_booking_state)) -> dict:
    value = state.fallback_identifier
    return {
        "IdentificacaoDaViagem": value,
        "preview": preview(value) if value else None,
    }


@router.post("/identificacao", status_code=status.HTTP_200_OK)
async def set_fallback_identifier(
    payload: dict[str, Any] = Body(...),
    state: BookingState = Depends(get_booking_state),
) -> dict:
    candidate = first_value(payload, FALLBACK_IDENTIFIER_INPUT_FIELDS)
    value = state.set_fallback_identifier(candidate if isinstance(candidate, str) else None)
    logger.info("Fallback trip identifier replaced", extra={"preview": preview(value)})
    return {"ok": True, "preview": preview(value)}
