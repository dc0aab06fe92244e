"""Interface IdGenerator - Puerto para generación de identificadores cortos."""

import secrets
import string
import time
from abc import ABC, abstractmethod

BASE36_CHARS = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36_CHARS[rem])
    return "".join(reversed(digits))


class IdGenerator(ABC):
    """
    Puerto para generación de identificadores.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def generate_offer_id(self) -> str:
        """
        Genera el id público de una oferta.

        Returns:
            String de 6 caracteres base36 (minúsculas y dígitos).
        """
        raise NotImplementedError

    @abstractmethod
    def generate_request_id(self) -> str:
        """
        Genera el id de una ejecución de reserva/emisión (para logs y debug).

        Returns:
            String '<timestamp base36>-<5 caracteres aleatorios>'.
        """
        raise NotImplementedError


class RealIdGenerator(IdGenerator):
    """Implementación real con ``secrets``."""

    OFFER_ID_LENGTH = 6
    REQUEST_SUFFIX_LENGTH = 5

    def _random(self, length: int) -> str:
        return "".join(secrets.choice(BASE36_CHARS) for _ in range(length))

    def generate_offer_id(self) -> str:
        return self._random(self.OFFER_ID_LENGTH)

    def generate_request_id(self) -> str:
        return f"{to_base36(int(time.time() * 1000))}-{self._random(self.REQUEST_SUFFIX_LENGTH)}"


class FakeIdGenerator(IdGenerator):
    """
    Implementación fake para testing.

    Genera valores predecibles basados en contadores.
    """

    def __init__(self, prefix: str = "t"):
        self._prefix = prefix
        self._offer_counter = 0
        self._request_counter = 0

    def generate_offer_id(self) -> str:
        self._offer_counter += 1
        return f"{self._prefix}{self._offer_counter:05d}"[:6]

    def generate_request_id(self) -> str:
        self._request_counter += 1
        return f"req{self._request_counter:04d}-{self._prefix}"
