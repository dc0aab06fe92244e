import json

from app.api.schemas.reservations import PassengerIn, ReserveRequest
from app.domain.entities.passenger import Passenger, Phone
from app.domain.value_objects.passenger_name import PassengerName, sanitize_for_api


def test_forbidden_tokens_are_replaced_case_insensitive():
    assert sanitize_for_api("Teste Silva") == "USUARIO Silva"
    assert sanitize_for_api("qa.test@example.com") == "qa.USER@example.com"
    assert sanitize_for_api(None) is None


def test_passenger_name_collapses_whitespace():
    name = PassengerName("  Maria   Clara ", "teste")

    assert name.given_name == "Maria Clara"
    assert name.family_name == "USUARIO"


def test_to_upstream_applies_defaults_and_sanitizes():
    passenger = Passenger(
        given_name="Test",
        family_name="Silva",
        birth_date="1990-05-10",
        sex="F",
        national_id="12345678909",
        phone=Phone(area_code="11", number="999998888"),
        email="test@example.com",
    )

    assert passenger.to_upstream() == {
        "Nome": "USER",
        "Sobrenome": "Silva",
        "Nascimento": "1990-05-10",
        "Sexo": "F",
        "FaixaEtaria": "ADT",
        "CPF": "12345678909",
        "Telefone": {"NumeroDDD": "11", "NumeroTelefone": "999998888", "NumeroDDI": "55"},
        "Email": "USER@example.com",
    }


def test_missing_fields_are_reported_not_rejected():
    passenger = Passenger(given_name="Maria")

    assert not passenger.is_complete
    assert "family_name" in passenger.missing
    assert "Telefone" not in passenger.to_upstream()


def test_schema_drops_unknown_fields_and_coerces_numbers(passenger_payload):
    passenger_payload["Apelido"] = "Mari"
    passenger_payload["CPF"] = 12345678909

    passenger = PassengerIn.model_validate(passenger_payload).to_entity()

    assert passenger.national_id == "12345678909"
    assert passenger.age_band == "ADT"
    assert passenger.phone.country_code == "55"
    assert passenger.is_complete
    assert "Apelido" not in passenger.to_upstream()


def test_reserve_request_accepts_passengers_as_json_string(passenger_payload):
    request = ReserveRequest.model_validate({"Passageiros": json.dumps([passenger_payload])})

    assert [p.given_name for p in request.passenger_entities()] == ["Maria"]


def test_reserve_request_invalid_passenger_string_is_empty():
    request = ReserveRequest.model_validate({"Passageiros": "{not json"})

    assert request.passenger_entities() == []


def test_reserve_request_keeps_extra_fields_for_identifier_lookup():
    request = ReserveRequest.model_validate({"identificacaoDaViagem": "abc", "CobrancaDeServico": {"Valor": 10}})

    payload = request.raw_payload()

    assert payload["identificacaoDaViagem"] == "abc"
    assert payload["CobrancaDeServico"] == {"Valor": 10}
    assert request.service_charge == {"Valor": 10}
