"""Value Object TripIdentifier - itinerario tarifado opaco."""

from dataclasses import dataclass

PREVIEW_LENGTH = 24


def preview(value: str | None, length: int = PREVIEW_LENGTH) -> str:
    """Prefijo corto para logs y diagnóstico; nunca el valor completo."""
    return str(value or "")[:length] + "…"


@dataclass(frozen=True)
class TripIdentifier:
    """
    IdentificacaoDaViagem tal como la emite el motor de tarifas.

    Es un blob opaco: nunca se parsea, solo se reenvía. ``source`` indica de
    dónde se resolvió (payload, lastFlightBody, header, query, fallback).
    """

    value: str
    source: str = "payload"
    return_value: str | None = None

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("IdentificacaoDaViagem no puede estar vacía")

    def __str__(self) -> str:
        return self.value

    @property
    def preview(self) -> str:
        return preview(self.value)
