from functools import lru_cache

from fastapi import Depends

from app.application.booking_state import BookingState
from app.application.dtos.booking_dto import StageTimeouts
from app.application.interfaces.booking_gateway import BookingGateway, Credentials
from app.application.interfaces.id_generator import IdGenerator, RealIdGenerator
from app.application.interfaces.offer_store import OfferStore
from app.application.use_cases.booking_orchestrator import BookingOrchestrator
from app.application.use_cases.manage_offers import CreateOfferUseCase, GetOfferUseCase
from app.config import Settings, get_settings
from app.infrastructure.gateways.booking_gateway_http import HttpBookingGateway
from app.infrastructure.in_memory.offer_store import InMemoryOfferStore


@lru_cache(maxsize=1)
def get_booking_state() -> BookingState:
    return BookingState(fallback_identifier=get_settings().fallback_identifier)


@lru_cache(maxsize=1)
def get_offer_store() -> OfferStore:
    return InMemoryOfferStore(ttl_seconds=get_settings().offer_ttl_seconds)


@lru_cache(maxsize=1)
def get_id_generator() -> IdGenerator:
    return RealIdGenerator()


@lru_cache(maxsize=4)
def _http_gateway(base_url: str, initiate_timeout_ms: int) -> HttpBookingGateway:
    return HttpBookingGateway(base_url=base_url, initiate_timeout_ms=initiate_timeout_ms)


def get_booking_gateway(settings: Settings = Depends(get_settings)) -> BookingGateway:
    return _http_gateway(settings.gateway_base_url, settings.initiate_timeout_ms)


def get_orchestrator(
    settings: Settings = Depends(get_settings),
    gateway: BookingGateway = Depends(get_booking_gateway),
    state: BookingState = Depends(get_booking_state),
    id_generator: IdGenerator = Depends(get_id_generator),
) -> BookingOrchestrator:
    return BookingOrchestrator(
        gateway=gateway,
        credentials=Credentials(email=settings.gateway_email, password=settings.gateway_password),
        timeouts=StageTimeouts(
            login_ms=settings.login_timeout_ms,
            reserve_ms=settings.reserve_timeout_ms,
            issue_ms=settings.issue_timeout_ms,
        ),
        state=state,
        id_generator=id_generator,
        force_mock=settings.force_mock,
    )


def get_use_cases(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
    offer_store: OfferStore = Depends(get_offer_store),
):
    return {
        "booking": orchestrator,
        "create_offer": CreateOfferUseCase(offer_store=offer_store),
        "get_offer": GetOfferUseCase(offer_store=offer_store),
    }
