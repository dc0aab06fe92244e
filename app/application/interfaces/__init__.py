"""Interfaces (Puertos) de la capa de aplicación."""

from app.application.interfaces.booking_gateway import BookingGateway, Credentials, GatewayResponse
from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.id_generator import FakeIdGenerator, IdGenerator, RealIdGenerator
from app.application.interfaces.offer_store import OfferStore

__all__ = [
    # Gateways
    "BookingGateway",
    "Credentials",
    "GatewayResponse",
    # Storage
    "OfferStore",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]
