"""Puerto de tiempo: expiración de ofertas y marca de último flight recibido."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Instante actual, siempre timezone-aware (UTC)."""
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """
    Reloj detenido para tests; solo avanza cuando se le pide.

    Sirve para probar el TTL de ofertas sin esperar de verdad.
    """

    def __init__(self, start: datetime | None = None):
        self._current = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._current

    def advance(self, seconds: float = 0, minutes: int = 0, hours: int = 0) -> None:
        self._current += timedelta(seconds=seconds, minutes=minutes, hours=hours)
