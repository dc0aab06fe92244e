from pydantic import BaseModel


class OfferCreatedResponse(BaseModel):
    id: str
