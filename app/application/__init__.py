"""
Capa de Aplicación - Reservas y emisión de bilhetes.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta el flujo contra el gateway y define los contratos con la infraestructura.

Estructura:
- use_cases/: Orquestador de reserva/emisión y casos de uso de ofertas
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
- booking_state.py: Estado compartido por instancia (último flight, fallback, debug)
"""

from app.application.dtos import (
    DebugSnapshot,
    IssuanceResult,
    ReservationResult,
    ReserveCommand,
    StageTimeouts,
)
from app.application.interfaces import (
    BookingGateway,
    Clock,
    Credentials,
    FakeClock,
    FakeIdGenerator,
    GatewayResponse,
    IdGenerator,
    OfferStore,
    RealIdGenerator,
    SystemClock,
)

__all__ = [
    # DTOs
    "DebugSnapshot",
    "IssuanceResult",
    "ReservationResult",
    "ReserveCommand",
    "StageTimeouts",
    # Interfaces - Gateways
    "BookingGateway",
    "Credentials",
    "GatewayResponse",
    # Interfaces - Storage
    "OfferStore",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]
