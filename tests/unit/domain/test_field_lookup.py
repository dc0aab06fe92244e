from app.domain.field_lookup import (
    BUSINESS_MESSAGE_FIELDS,
    RESERVATION_LOCATOR_PATH,
    TOKEN_FIELDS,
    first_text,
    first_value,
    read_path,
)


def test_token_lookup_order():
    assert first_text({"token": "c", "accessToken": "b", "access_token": "a"}, TOKEN_FIELDS) == "a"
    assert first_text({"token": "c", "accessToken": "b"}, TOKEN_FIELDS) == "b"
    assert first_text({"token": "c"}, TOKEN_FIELDS) == "c"
    assert first_text({"access_token": ""}, TOKEN_FIELDS) is None


def test_read_path_indexes_lists():
    body = {"Reservas": [{"Localizador": "ABC123"}]}

    assert read_path(body, RESERVATION_LOCATOR_PATH) == "ABC123"
    assert read_path({"Reservas": []}, RESERVATION_LOCATOR_PATH) is None
    assert read_path({"Reservas": {"0": {}}}, RESERVATION_LOCATOR_PATH) is None
    assert read_path("text", RESERVATION_LOCATOR_PATH) is None


def test_booleans_are_skipped_unless_accepted():
    body = {"error": True, "Error": "Falha"}

    assert first_value(body, BUSINESS_MESSAGE_FIELDS) == "Falha"
    assert first_value({"error": True}, [("error",)], accept_bool=True) is True
