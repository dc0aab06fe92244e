"""Entidad Offer - cotización guardada temporalmente en memoria."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Offer:
    """
    Oferta (cotización) referenciada por un id corto aleatorio.

    Inmutable: no existe operación de renovación ni edición.
    """

    id: str
    payload: dict[str, Any]
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Expirada estrictamente después de ``expires_at``."""
        return now > self.expires_at
