from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Body, status
from fastapi.responses import Response

from app.infrastructure.documents.ticket_pdf import build_ticket_filename, render_ticket_document

router = APIRouter()

DEFAULT_PAYMENT = {"method": "pix", "confirmed": True}


def _section(payload: dict[str, Any], *keys: str) -> dict[str, Any] | None:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, dict) and value:
            return value
    return None


@router.post("/pdf", status_code=status.HTTP_200_OK, response_class=Response)
async def ticket_pdf(payload: dict[str, Any] = Body(default_factory=dict)) -> Response:
    """Bilhete em PDF a partir dos blocos voo/passageiro/pagamento."""
    flight = _section(payload, "flight", "voo") or payload
    passenger = _section(payload, "passenger", "passageiro") or {}
    payment = _section(payload, "payment", "pagamento") or DEFAULT_PAYMENT

    content = render_ticket_document(flight, passenger, payment)
    filename = build_ticket_filename(flight, passenger)
    ascii_name = filename.encode("ascii", "ignore").decode() or "bilhete.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
        },
    )
