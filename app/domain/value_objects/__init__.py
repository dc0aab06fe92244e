"""Value Objects del dominio de reservas aéreas."""

from app.domain.value_objects.passenger_name import PassengerName, sanitize_for_api
from app.domain.value_objects.trip_identifier import TripIdentifier

__all__ = [
    "PassengerName",
    "TripIdentifier",
    "sanitize_for_api",
]
