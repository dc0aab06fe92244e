import pytest

from app.application.dtos.booking_dto import ReserveCommand
from app.application.interfaces.booking_gateway import Credentials, GatewayResponse
from app.application.interfaces.id_generator import FakeIdGenerator
from app.application.use_cases.booking_orchestrator import BookingOrchestrator, build_mock_reservation
from app.domain.entities.passenger import Passenger
from app.domain.errors import (
    AuthRejectedError,
    BusinessError,
    MalformedUpstreamResponseError,
    MissingCredentialsError,
    MissingIdentifierError,
    MissingLocatorError,
    UpstreamHttpError,
)

IDENT = "IDENT-0123456789-ABCDEFGHIJ"


def _command(**kwargs) -> ReserveCommand:
    kwargs.setdefault("payload", {"IdentificacaoDaViagem": IDENT})
    kwargs.setdefault("passengers", [Passenger(given_name="Maria", family_name="Silva")])
    return ReserveCommand(**kwargs)


@pytest.mark.asyncio
async def test_reserve_happy_path(orchestrator, fake_gateway):
    result = await orchestrator.reserve(_command())

    assert result.locator == "ABC123"
    assert result.raw == {"Reservas": [{"Localizador": "ABC123", "CodigoReserva": "ABC123"}]}
    assert result.issuance is None
    assert [name for name, _ in fake_gateway.calls] == ["login", "reserve"]

    reserve_call = fake_gateway.calls_to("reserve")[0]
    assert reserve_call["token"] == "tok-123"
    assert reserve_call["trip"].value == IDENT
    assert reserve_call["trip"].source == "payload"
    assert reserve_call["timeout_ms"] == 240000
    assert fake_gateway.calls_to("login")[0]["timeout_ms"] == 30000


@pytest.mark.asyncio
async def test_each_run_logs_in_again(orchestrator, fake_gateway):
    await orchestrator.reserve(_command())
    await orchestrator.reserve(_command())

    assert len(fake_gateway.calls_to("login")) == 2


@pytest.mark.asyncio
async def test_force_mock_makes_no_gateway_calls(orchestrator, fake_gateway):
    result = await orchestrator.reserve(_command(force_mock=True))

    assert result.mock is True
    assert result.raw["_mock"] is True
    assert result.locator == result.raw["Reservas"][0]["Localizador"]
    assert fake_gateway.calls == []
    assert orchestrator.state.last_snapshot.mock is True


@pytest.mark.asyncio
async def test_force_mock_setting(fake_gateway, credentials, timeouts, booking_state):
    orchestrator = BookingOrchestrator(
        gateway=fake_gateway,
        credentials=credentials,
        timeouts=timeouts,
        state=booking_state,
        id_generator=FakeIdGenerator(),
        force_mock=True,
    )

    result = await orchestrator.reserve(_command(payload={}))

    assert result.mock is True
    assert fake_gateway.calls == []


def test_mock_locator_derived_from_request_id():
    assert build_mock_reservation("lq3x-9ab1c")["Reservas"][0]["Localizador"] == "LQ3X9A"
    assert build_mock_reservation("--")["Reservas"][0]["Localizador"] == "PNRMOCK"


@pytest.mark.asyncio
async def test_missing_identifier_makes_no_gateway_calls(orchestrator, fake_gateway):
    with pytest.raises(MissingIdentifierError):
        await orchestrator.reserve(_command(payload={}))

    assert fake_gateway.calls == []
    assert orchestrator.state.last_snapshot.error == "MISSING_IDENTIFIER"


@pytest.mark.asyncio
async def test_missing_credentials(fake_gateway, timeouts, booking_state):
    orchestrator = BookingOrchestrator(
        gateway=fake_gateway,
        credentials=Credentials(email=None, password="secret"),
        timeouts=timeouts,
        state=booking_state,
        id_generator=FakeIdGenerator(),
    )

    with pytest.raises(MissingCredentialsError):
        await orchestrator.reserve(_command())
    with pytest.raises(MissingCredentialsError):
        orchestrator.check_readiness()

    assert fake_gateway.calls == []


def test_check_readiness(orchestrator):
    orchestrator.state.set_fallback_identifier(IDENT)

    ready = orchestrator.check_readiness()

    assert ready["ok"] is True
    assert ready["hasFallbackIdentificacao"] is True
    assert ready["timeouts"] == {"loginMs": 30000, "reserveMs": 240000, "issueMs": 120000}


def test_identifier_resolution_order(orchestrator):
    state = orchestrator.state
    state.set_fallback_identifier("F" * 24)
    state.set_last_flight_body({"identificacaoDaViagem": "from-flight"})
    command = _command(payload={}, header_identifier="from-header", query_identifier="from-query")

    assert orchestrator.resolve_trip_identifier(command).source == "lastFlightBody"

    command.payload = {"identificacao_viagem": "from-payload"}
    trip = orchestrator.resolve_trip_identifier(command)
    assert (trip.source, trip.value) == ("payload", "from-payload")

    state.set_last_flight_body(None)
    command.payload = {}
    assert orchestrator.resolve_trip_identifier(command).source == "header"

    command.header_identifier = None
    assert orchestrator.resolve_trip_identifier(command).source == "query"

    command.query_identifier = None
    trip = orchestrator.resolve_trip_identifier(command)
    assert (trip.source, trip.value) == ("fallback", "F" * 24)


def test_return_trip_identifier_is_carried(orchestrator):
    command = _command(payload={"IdentificacaoDaViagem": IDENT, "IdentificacaoDaViagemVolta": "VOLTA-1"})

    assert orchestrator.resolve_trip_identifier(command).return_value == "VOLTA-1"


@pytest.mark.asyncio
async def test_business_error_carries_code_and_debug(orchestrator, fake_gateway):
    body = {"Exception": {"Code": "X1", "Message": "Past date segment"}}
    fake_gateway.reserve_response = GatewayResponse(status_code=200, body=body)

    with pytest.raises(BusinessError) as exc_info:
        await orchestrator.reserve(_command())

    error = exc_info.value
    assert error.business_code == "X1"
    assert error.message == "Past date segment"
    assert error.data == body
    assert error.stage == "reserve"
    assert error.debug["businessCode"] == "X1"
    assert error.debug["source"] == "payload"
    assert orchestrator.state.last_snapshot.business_message == "Past date segment"


@pytest.mark.asyncio
async def test_empty_reservations_is_business_error(orchestrator, fake_gateway):
    fake_gateway.reserve_response = GatewayResponse(status_code=200, body={"Reservas": []})

    with pytest.raises(BusinessError):
        await orchestrator.reserve(_command())


@pytest.mark.asyncio
async def test_upstream_http_error_keeps_status(orchestrator, fake_gateway):
    fake_gateway.reserve_response = GatewayResponse(status_code=500, body={"raw": "boom"})

    with pytest.raises(UpstreamHttpError) as exc_info:
        await orchestrator.reserve(_command())

    assert exc_info.value.http_status == 500
    assert exc_info.value.details()["data"] == {"raw": "boom"}
    assert orchestrator.state.last_snapshot.reserve_status == 500


@pytest.mark.asyncio
async def test_login_error_stops_the_run(orchestrator, fake_gateway):
    fake_gateway.login_error = AuthRejectedError(status=401, body={"message": "bad"})

    with pytest.raises(AuthRejectedError):
        await orchestrator.reserve(_command())

    assert fake_gateway.calls_to("reserve") == []
    assert orchestrator.state.last_snapshot.error == "LOGIN_FAILED"


@pytest.mark.asyncio
async def test_reserve_and_issue_uses_one_login(orchestrator, fake_gateway):
    result = await orchestrator.reserve_and_issue(_command())

    assert [name for name, _ in fake_gateway.calls] == ["login", "reserve", "issue"]
    assert fake_gateway.calls_to("issue")[0]["locator"] == "ABC123"
    assert fake_gateway.calls_to("issue")[0]["token"] == "tok-123"
    assert result.issuance.ticket_number == "9572100000001"
    assert orchestrator.state.last_snapshot.operation == "reserve_and_issue"


@pytest.mark.asyncio
async def test_reserve_and_issue_ignores_mock(orchestrator, fake_gateway):
    result = await orchestrator.reserve_and_issue(_command(force_mock=True))

    assert result.mock is False
    assert len(fake_gateway.calls_to("issue")) == 1


@pytest.mark.asyncio
async def test_reserve_and_issue_with_locator_skips_reserve(orchestrator, fake_gateway):
    result = await orchestrator.reserve_and_issue(_command(payload={}), locator=" XYZ789 ")

    assert [name for name, _ in fake_gateway.calls] == ["login", "issue"]
    assert result.locator == "XYZ789"
    assert result.raw is None


@pytest.mark.asyncio
async def test_reserve_and_issue_without_extractable_locator(orchestrator, fake_gateway):
    fake_gateway.reserve_response = GatewayResponse(status_code=200, body={"Mensagem": "OK"})

    with pytest.raises(MalformedUpstreamResponseError) as exc_info:
        await orchestrator.reserve_and_issue(_command())

    assert exc_info.value.code == "MISSING_LOCATOR_FROM_RESERVE"
    assert fake_gateway.calls_to("issue") == []


@pytest.mark.asyncio
async def test_issue_business_error_includes_locator(orchestrator, fake_gateway):
    fake_gateway.issue_response = GatewayResponse(status_code=200, body={"error": True, "Mensagem": "Recusado"})

    with pytest.raises(BusinessError) as exc_info:
        await orchestrator.issue("ABC123")

    assert exc_info.value.details()["localizador"] == "ABC123"
    assert exc_info.value.stage == "issue"


@pytest.mark.asyncio
async def test_issue_without_locator_makes_no_calls(orchestrator, fake_gateway):
    with pytest.raises(MissingLocatorError):
        await orchestrator.issue("   ")

    assert fake_gateway.calls == []


@pytest.mark.asyncio
async def test_non_object_body_is_malformed(orchestrator, fake_gateway):
    fake_gateway.reserve_response = GatewayResponse(status_code=200, body=["unexpected"])

    with pytest.raises(MalformedUpstreamResponseError):
        await orchestrator.reserve(_command())


@pytest.mark.asyncio
async def test_snapshot_is_overwritten_per_run(orchestrator):
    await orchestrator.reserve(_command())
    first = orchestrator.state.last_snapshot

    await orchestrator.issue("ABC123")
    second = orchestrator.state.last_snapshot

    assert first.request_id == "req0001-t"
    assert second.request_id == "req0002-t"
    assert second.operation == "issue"
    assert second.to_dict()["issueStatus"] == 200
    assert second.to_dict()["timeouts"]["issueMs"] == 120000

