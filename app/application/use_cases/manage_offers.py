import logging
from typing import Any

from app.application.interfaces.offer_store import OfferStore
from app.domain.entities.offer import Offer
from app.domain.errors import InvalidOfferPayloadError


class CreateOfferUseCase:
    """Publica una oferta compartible; solo exige el tramo de ida."""

    def __init__(self, offer_store: OfferStore) -> None:
        self._offer_store = offer_store
        self._logger = logging.getLogger(__name__)

    def execute(self, payload: Any) -> Offer:
        if not isinstance(payload, dict) or not payload.get("ida"):
            raise InvalidOfferPayloadError()

        offer = self._offer_store.create(payload)
        self._logger.info(
            "Offer created",
            extra={"offer_id": offer.id, "expires_at": offer.expires_at.isoformat()},
        )
        return offer


class GetOfferUseCase:
    def __init__(self, offer_store: OfferStore) -> None:
        self._offer_store = offer_store

    def execute(self, offer_id: str) -> dict[str, Any]:
        return self._offer_store.get(offer_id)
