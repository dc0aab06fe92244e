"""Value Object PassengerName - nombre saneado para el gateway."""

import re
from dataclasses import dataclass

# El gateway rechaza (o marca como prueba) registros con estos tokens.
# Orden importa: TESTE debe reemplazarse antes que TEST.
FORBIDDEN_TOKENS: tuple[tuple[str, str], ...] = (
    ("TESTE", "USUARIO"),
    ("TEST", "USER"),
)

_FORBIDDEN_PATTERNS = tuple(
    (re.compile(token, re.IGNORECASE), replacement) for token, replacement in FORBIDDEN_TOKENS
)


def sanitize_for_api(text: str | None) -> str | None:
    """Reemplaza los tokens prohibidos conservando el resto del texto."""
    if not text:
        return text
    for pattern, replacement in _FORBIDDEN_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


@dataclass(frozen=True)
class PassengerName:
    """
    Nombre y apellido tal como se transmiten al gateway.

    Se normaliza espacio en blanco y se reemplazan los tokens prohibidos.
    """

    given_name: str
    family_name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "given_name", self._clean(self.given_name))
        object.__setattr__(self, "family_name", self._clean(self.family_name))

    @staticmethod
    def _clean(value: str | None) -> str:
        collapsed = " ".join(str(value or "").split())
        return sanitize_for_api(collapsed) or ""
