"""
Ordered field accessors for upstream payloads.

The booking gateway and the clients that call us are inconsistent about key
casing (and sometimes language). Every field that has more than one accepted
spelling is described here exactly once, as an ordered tuple of accessors.
The first accessor that yields a usable value wins.

An accessor is a tuple of keys forming a path into nested dicts (integers
index into lists), e.g. ``("Exception", "Code")`` reads
``body["Exception"]["Code"]``.
"""

from typing import Any, Iterable

Accessor = tuple[str | int, ...]

# Bearer token in the login response.
TOKEN_FIELDS: tuple[Accessor, ...] = (
    ("access_token",),
    ("accessToken",),
    ("token",),
)

# Business error code: exception object first, then top level.
BUSINESS_CODE_FIELDS: tuple[Accessor, ...] = (
    ("Exception", "Code"),
    ("Exception", "code"),
    ("Code",),
    ("code",),
)

# Business error message: exception object first, then the top-level
# message variants (Portuguese and English, both casings).
BUSINESS_MESSAGE_FIELDS: tuple[Accessor, ...] = (
    ("Exception", "Message"),
    ("Exception", "message"),
    ("Mensagem",),
    ("mensagem",),
    ("error",),
    ("Error",),
)

# Trip identifier in an inbound request or in the cached flight body.
TRIP_IDENTIFIER_FIELDS: tuple[Accessor, ...] = (
    ("IdentificacaoDaViagem",),
    ("identificacaoDaViagem",),
    ("identificacao_viagem",),
)

# Return-leg trip identifier.
RETURN_TRIP_IDENTIFIER_FIELDS: tuple[Accessor, ...] = (
    ("IdentificacaoDaViagemVolta",),
    ("identificacaoDaViagemVolta",),
    ("identificacao_viagem_volta",),
)

# Durable reservation key. Single path on purpose: no guessing.
RESERVATION_LOCATOR_PATH: Accessor = ("Reservas", 0, "Localizador")

# Ticket number in an issuance response (optional).
TICKET_NUMBER_PATH: Accessor = ("Bilhetes", 0, "NumeroBilhete")

# Replacement fallback identifier posted to /identificacao.
FALLBACK_IDENTIFIER_INPUT_FIELDS: tuple[Accessor, ...] = TRIP_IDENTIFIER_FIELDS + (
    ("identificacao",),
    ("value",),
)


def read_path(source: Any, path: Accessor) -> Any:
    current = source
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def first_value(
    source: Any,
    accessors: Iterable[Accessor],
    accept_bool: bool = False,
) -> Any:
    """
    Return the first non-empty value found by ``accessors`` in ``source``.

    ``None`` and empty strings are skipped. Booleans are skipped unless
    ``accept_bool`` is set, so flags such as ``"error": true`` are never
    mistaken for a message.
    """
    for path in accessors:
        value = read_path(source, path)
        if value is None or value == "":
            continue
        if isinstance(value, bool) and not accept_bool:
            continue
        return value
    return None


def first_text(source: Any, accessors: Iterable[Accessor]) -> str | None:
    value = first_value(source, accessors)
    if value is None:
        return None
    return str(value)
