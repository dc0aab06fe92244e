"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Gateway fake que registra las llamadas (sin red)
- Orquestador con estado, ids y timeouts deterministas
- Cliente HTTP de prueba (FastAPI TestClient) con dependencias sobreescritas
"""

from datetime import datetime, timezone
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import (
    get_booking_gateway,
    get_booking_state,
    get_id_generator,
    get_offer_store,
)
from app.application.booking_state import BookingState
from app.application.dtos.booking_dto import StageTimeouts
from app.application.interfaces.booking_gateway import BookingGateway, Credentials, GatewayResponse
from app.application.interfaces.clock import FakeClock
from app.application.interfaces.id_generator import FakeIdGenerator
from app.application.use_cases.booking_orchestrator import BookingOrchestrator
from app.config import Settings, get_settings
from app.infrastructure.circuit_breaker import gateway_breaker
from app.infrastructure.in_memory.offer_store import InMemoryOfferStore
from app.main import app


class FakeBookingGateway(BookingGateway):
    """Gateway en memoria: respuestas configurables y registro de llamadas."""

    def __init__(
        self,
        token: str = "tok-123",
        reserve_response: GatewayResponse | None = None,
        issue_response: GatewayResponse | None = None,
        login_error: Exception | None = None,
    ) -> None:
        self.token = token
        self.reserve_response = reserve_response or GatewayResponse(
            status_code=200,
            body={"Reservas": [{"Localizador": "ABC123", "CodigoReserva": "ABC123"}]},
        )
        self.issue_response = issue_response or GatewayResponse(
            status_code=200,
            body={"Bilhetes": [{"NumeroBilhete": "9572100000001"}], "Mensagem": "OK"},
        )
        self.login_error = login_error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for call, kwargs in self.calls if call == name]

    async def login(self, credentials: Credentials, timeout_ms: int) -> str:
        self.calls.append(("login", {"email": credentials.email, "timeout_ms": timeout_ms}))
        if self.login_error:
            raise self.login_error
        return self.token

    async def reserve(self, token, trip, passengers, timeout_ms, service_charge=None) -> GatewayResponse:
        self.calls.append(
            (
                "reserve",
                {
                    "token": token,
                    "trip": trip,
                    "passengers": passengers,
                    "timeout_ms": timeout_ms,
                    "service_charge": service_charge,
                },
            )
        )
        return self.reserve_response

    async def issue(self, token, locator, timeout_ms) -> GatewayResponse:
        self.calls.append(("issue", {"token": token, "locator": locator, "timeout_ms": timeout_ms}))
        return self.issue_response


# ============================================================================
# FIXTURES DE DOMINIO
# ============================================================================


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(email="seller@test.local", password="secret")


@pytest.fixture
def timeouts() -> StageTimeouts:
    return StageTimeouts(login_ms=30000, reserve_ms=240000, issue_ms=120000)


@pytest.fixture
def fake_gateway() -> FakeBookingGateway:
    return FakeBookingGateway()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def booking_state(fake_clock) -> BookingState:
    return BookingState(clock=fake_clock)


@pytest.fixture
def orchestrator(fake_gateway, credentials, timeouts, booking_state) -> BookingOrchestrator:
    return BookingOrchestrator(
        gateway=fake_gateway,
        credentials=credentials,
        timeouts=timeouts,
        state=booking_state,
        id_generator=FakeIdGenerator(),
    )


@pytest.fixture
def passenger_payload() -> dict[str, Any]:
    return {
        "Nome": "Maria",
        "Sobrenome": "Silva",
        "Nascimento": "1990-05-10",
        "Sexo": "F",
        "CPF": "12345678909",
        "Telefone": {"NumeroDDD": "11", "NumeroTelefone": "999998888"},
        "Email": "maria@example.com",
    }


# ============================================================================
# FIXTURES DE API
# ============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        gateway_base_url="http://gateway.test/api/v1",
        gateway_email="seller@test.local",
        gateway_password="secret",
        fallback_identifier=None,
        force_mock=False,
    )


@pytest.fixture
def api_state(fake_clock) -> BookingState:
    return BookingState(clock=fake_clock)


@pytest.fixture
def offer_store(fake_clock) -> InMemoryOfferStore:
    return InMemoryOfferStore(ttl_seconds=3600, clock=fake_clock, id_generator=FakeIdGenerator())


@pytest.fixture
def client(test_settings, fake_gateway, api_state, offer_store) -> Generator[TestClient, None, None]:
    """TestClient con gateway fake y estado aislado por test."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_booking_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_booking_state] = lambda: api_state
    app.dependency_overrides[get_offer_store] = lambda: offer_store
    id_generator = FakeIdGenerator()
    app.dependency_overrides[get_id_generator] = lambda: id_generator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    offer_store.close()


# ============================================================================
# HOOKS DE PYTEST
# ============================================================================


@pytest.fixture(autouse=True)
def reset_circuit_breaker():
    """
    Reset circuit breaker antes de cada test.
    Evita que tests fallen por un breaker abierto en un test anterior.
    """
    gateway_breaker.close()
    yield
    gateway_breaker.close()
