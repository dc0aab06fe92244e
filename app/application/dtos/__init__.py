"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from app.application.dtos.booking_dto import (
    DebugSnapshot,
    IssuanceResult,
    ReservationResult,
    ReserveCommand,
    StageTimeouts,
)

__all__ = [
    "DebugSnapshot",
    "IssuanceResult",
    "ReservationResult",
    "ReserveCommand",
    "StageTimeouts",
]
