"""
Capa de Dominio - Reservas y emisión de bilhetes aéreos.

Lógica de negocio pura, sin dependencias de frameworks ni de red.

Estructura:
- entities/: Passenger, Offer
- value_objects/: PassengerName, TripIdentifier
- business_outcome.py: clasificador de errores de negocio en respuestas 200
- field_lookup.py: accesores ordenados para campos con variantes de nombre
- errors.py: excepciones del dominio
"""

from app.domain.business_outcome import BusinessFailure, Success, classify
from app.domain.entities import Offer, Passenger, Phone
from app.domain.errors import (
    AuthMalformedError,
    AuthRejectedError,
    AuthTimeoutError,
    AuthTransportError,
    BusinessError,
    DomainError,
    GatewayUnavailableError,
    InvalidOfferPayloadError,
    IssueTimeoutError,
    IssueTransportError,
    MalformedUpstreamResponseError,
    MissingCredentialsError,
    MissingIdentifierError,
    MissingLocatorError,
    OfferNotFoundError,
    ReserveTimeoutError,
    ReserveTransportError,
    UpstreamHttpError,
    UpstreamTimeoutError,
    UpstreamTransportError,
    ValidationError,
)
from app.domain.value_objects import PassengerName, TripIdentifier, sanitize_for_api

__all__ = [
    # Classifier
    "BusinessFailure",
    "Success",
    "classify",
    # Entities
    "Offer",
    "Passenger",
    "Phone",
    # Value Objects
    "PassengerName",
    "TripIdentifier",
    "sanitize_for_api",
    # Errors
    "AuthMalformedError",
    "AuthRejectedError",
    "AuthTimeoutError",
    "AuthTransportError",
    "BusinessError",
    "DomainError",
    "GatewayUnavailableError",
    "InvalidOfferPayloadError",
    "IssueTimeoutError",
    "IssueTransportError",
    "MalformedUpstreamResponseError",
    "MissingCredentialsError",
    "MissingIdentifierError",
    "MissingLocatorError",
    "OfferNotFoundError",
    "ReserveTimeoutError",
    "ReserveTransportError",
    "UpstreamHttpError",
    "UpstreamTimeoutError",
    "UpstreamTransportError",
    "ValidationError",
]
