from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from app.domain.entities.passenger import Passenger
from app.domain.value_objects.trip_identifier import TripIdentifier


@dataclass(frozen=True)
class Credentials:
    email: str | None
    password: str | None

    @property
    def is_configured(self) -> bool:
        return bool(self.email and self.password)


@dataclass
class GatewayResponse:
    status_code: int
    body: Any  # parsed JSON, or {"raw": text} when the body is not JSON
    text: str = ""
    elapsed_ms: int = 0

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class BookingGateway(ABC):
    """Port for the upstream booking gateway (login, reserve, issue)."""

    @abstractmethod
    async def login(self, credentials: Credentials, timeout_ms: int) -> str:
        """
        Authenticates and returns a bearer token for one orchestration run.

        Raises AuthTimeoutError, AuthTransportError, AuthRejectedError or
        AuthMalformedError.
        """
        pass

    @abstractmethod
    async def reserve(
        self,
        token: str,
        trip: TripIdentifier,
        passengers: list[Passenger],
        timeout_ms: int,
        service_charge: Any = None,
    ) -> GatewayResponse:
        """
        Creates the reservation. Raises ReserveTimeoutError or
        ReserveTransportError; any HTTP response is returned as-is.
        """
        pass

    @abstractmethod
    async def issue(self, token: str, locator: str, timeout_ms: int) -> GatewayResponse:
        """
        Issues the ticket for ``locator``, preceded by a best-effort initiate
        call whose failure never propagates. Raises IssueTimeoutError or
        IssueTransportError.
        """
        pass
