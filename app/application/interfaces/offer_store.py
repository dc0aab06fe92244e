from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.offer import Offer


class OfferStore(ABC):
    """
    Puerto para el almacenamiento efímero de ofertas.

    Write-once, read-many hasta la expiración. No hay update ni delete.
    """

    @abstractmethod
    def create(self, payload: dict[str, Any]) -> Offer:
        """Guarda el payload y programa su limpieza al expirar."""
        raise NotImplementedError

    @abstractmethod
    def get(self, offer_id: str) -> dict[str, Any]:
        """
        Retorna el payload si la oferta existe y no expiró.

        Raises:
            OfferNotFoundError: id desconocido o expirado (se elimina al leer).
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Cancela las limpiezas programadas pendientes."""
        raise NotImplementedError
