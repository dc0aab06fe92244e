"""
Capa de Infraestructura - Reservas aéreas.

Implementaciones concretas de los puertos (interfaces).

Estructura:
- gateways/: Cliente HTTP del gateway de reservas
- in_memory/: Almacén efímero de ofertas
- documents/: Bilhete en PDF
- circuit_breaker.py: Circuit breaker del gateway
"""

from app.infrastructure.gateways.booking_gateway_http import HttpBookingGateway
from app.infrastructure.in_memory.offer_store import InMemoryOfferStore

__all__ = [
    "HttpBookingGateway",
    "InMemoryOfferStore",
]
