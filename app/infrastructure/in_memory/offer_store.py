import asyncio
import logging
from datetime import timedelta
from typing import Any

from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.id_generator import IdGenerator, RealIdGenerator
from app.application.interfaces.offer_store import OfferStore
from app.domain.entities.offer import Offer
from app.domain.errors import OfferNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600
MIN_RESWEEP_SECONDS = 1.0


class InMemoryOfferStore(OfferStore):
    """
    Ofertas en un dict de proceso, con TTL fijo.

    La verificación al leer es la que manda; el timer por entrada solo libera
    memoria. Si el reloj inyectado todavía no llegó a ``expires_at`` cuando el
    timer dispara, la limpieza se reprograma.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or SystemClock()
        self._id_generator = id_generator or RealIdGenerator()
        self.offers: dict[str, Offer] = {}
        self._sweeps: dict[str, asyncio.TimerHandle] = {}

    def create(self, payload: dict[str, Any]) -> Offer:
        offer_id = self._id_generator.generate_offer_id()
        while offer_id in self.offers:
            offer_id = self._id_generator.generate_offer_id()

        now = self._clock.now()
        offer = Offer(id=offer_id, payload=payload, created_at=now, expires_at=now + self._ttl)
        self.offers[offer_id] = offer
        self._schedule_sweep(offer_id, self._ttl.total_seconds())
        return offer

    def get(self, offer_id: str) -> dict[str, Any]:
        offer = self.offers.get(offer_id)
        if offer is None:
            logger.info("Offer not found", extra={"offer_id": offer_id})
            raise OfferNotFoundError(offer_id)
        if offer.is_expired(self._clock.now()):
            logger.info("Offer expired on read", extra={"offer_id": offer_id})
            self._discard(offer_id)
            raise OfferNotFoundError(offer_id)
        return offer.payload

    def close(self) -> None:
        for handle in self._sweeps.values():
            handle.cancel()
        self._sweeps.clear()

    def _schedule_sweep(self, offer_id: str, delay_seconds: float) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Sin loop (uso síncrono): queda solo la verificación al leer.
            return
        self._sweeps[offer_id] = loop.call_later(delay_seconds, self._sweep, offer_id)

    def _sweep(self, offer_id: str) -> None:
        self._sweeps.pop(offer_id, None)
        offer = self.offers.get(offer_id)
        if offer is None:
            return
        remaining = (offer.expires_at - self._clock.now()).total_seconds()
        if remaining > 0:
            self._schedule_sweep(offer_id, max(remaining, MIN_RESWEEP_SECONDS))
            return
        logger.info("Offer expired and removed", extra={"offer_id": offer_id})
        self.offers.pop(offer_id, None)

    def _discard(self, offer_id: str) -> None:
        self.offers.pop(offer_id, None)
        handle = self._sweeps.pop(offer_id, None)
        if handle is not None:
            handle.cancel()
