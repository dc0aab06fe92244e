from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.api.dependencies import get_use_cases
from app.api.schemas.offers import OfferCreatedResponse

router = APIRouter()


@router.post(
    "/oferta",
    response_model=OfferCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_offer(
    payload: Any = Body(default=None),
    use_cases=Depends(get_use_cases),
) -> OfferCreatedResponse:
    offer = use_cases["create_offer"].execute(payload)
    return OfferCreatedResponse(id=offer.id)


@router.get("/oferta/{offer_id}", status_code=status.HTTP_200_OK)
async def get_offer(offer_id: str, use_cases=Depends(get_use_cases)) -> dict:
    return use_cases["get_offer"].execute(offer_id)
