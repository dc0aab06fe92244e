"""Implementaciones in-memory."""

from app.infrastructure.in_memory.offer_store import InMemoryOfferStore

__all__ = ["InMemoryOfferStore"]
