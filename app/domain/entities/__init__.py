"""Entidades del dominio de reservas aéreas."""

from app.domain.entities.offer import Offer
from app.domain.entities.passenger import Passenger, Phone

__all__ = [
    "Offer",
    "Passenger",
    "Phone",
]
