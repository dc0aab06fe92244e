"""Bilhete aéreo em PDF (uma página A4, blocos de texto simples)."""

import re
from datetime import datetime
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

MARGIN = 56
TITLE_SIZE = 20
LABEL_SIZE = 10
TEXT_SIZE = 12
LINE_GAP = 6
BLOCK_GAP = 12
FOOTER_SIZE = 9
MAX_FILENAME_LENGTH = 80

_PDF_REPLACEMENTS = {
    "\u2192": "->",
    "\u2013": "-",
    "\u2014": "-",
    "\u2022": "-",
    "\u00a0": " ",
}


def _pdf_safe(value: Any) -> str:
    text = "" if value is None else str(value)
    for char, replacement in _PDF_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def _or_dash(value: Any) -> str:
    return "-" if value in (None, "") else str(value)


def sanitize_filename(name: str | None) -> str:
    cleaned = re.sub(r"[^\w\-]+", "_", (name or "").strip())
    cleaned = re.sub(r"_+", "_", cleaned).strip("_")
    return cleaned[:MAX_FILENAME_LENGTH] or "documento"


def to_iso_date(value: Any) -> str:
    """``dd/mm/yyyy`` -> ``yyyy-mm-dd``; cualquier otra cosa -> ``""``."""
    match = re.search(r"(\d{2})/(\d{2})/(\d{4})", str(value or ""))
    if not match:
        return ""
    day, month, year = match.groups()
    return f"{year}-{month}-{day}"


def build_ticket_filename(
    flight: dict[str, Any], passenger: dict[str, Any], today: datetime | None = None
) -> str:
    if flight.get("origin") and flight.get("destination"):
        route = f"{flight['origin']}-{flight['destination']}"
    elif flight.get("routeLine"):
        route = re.sub(r"\s*\u2192\s*", "-", str(flight["routeLine"]))
    else:
        route = "voo"
    date_iso = to_iso_date(flight.get("date")) or (today or datetime.now()).strftime("%Y-%m-%d")
    name = sanitize_filename(passenger.get("nomeCompleto") or "passageiro")
    return f"bilhete_{name}_{route}_{date_iso}.pdf"


def _flight_lines(flight: dict[str, Any]) -> list[str]:
    route = flight.get("routeLine")
    if not route and flight.get("origin") and flight.get("destination"):
        route = f"{flight['origin']} -> {flight['destination']}"
    lines = [
        flight.get("airlineLine"),
        route,
        f"Data: {_or_dash(flight.get('date'))}",
        f"Horário: {_or_dash(flight.get('depart'))} -> {_or_dash(flight.get('arrive'))}",
        f"Duração: {_or_dash(flight.get('duration'))}",
        f"Escalas: {_or_dash(flight.get('stops'))}",
        f"Bagagem: {_or_dash(flight.get('baggage'))}",
        f"Total: {_or_dash(flight.get('total'))}",
    ]
    return [line for line in lines if line]


def render_ticket_document(
    flight_info: dict[str, Any],
    passenger_info: dict[str, Any],
    payment_info: dict[str, Any],
    issued_at: datetime | None = None,
) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4
    content_width = width - 2 * MARGIN

    y = height - MARGIN - TITLE_SIZE
    c.setFont("Helvetica-Bold", TITLE_SIZE)
    c.setFillColor(colors.Color(0.18, 0.2, 0.6))
    c.drawString(MARGIN, y, "Bilhete Aéreo")

    c.setFillColor(colors.Color(0.8, 0.82, 0.95))
    c.rect(MARGIN, y - 11, content_width, 1, stroke=0, fill=1)
    y -= 26

    def draw_block(label: str, lines: list[str]) -> None:
        nonlocal y
        c.setFont("Helvetica-Bold", LABEL_SIZE)
        c.setFillColor(colors.Color(0.35, 0.37, 0.45))
        c.drawString(MARGIN, y, _pdf_safe(label))
        y -= LABEL_SIZE + 2

        c.setFont("Helvetica", TEXT_SIZE)
        c.setFillColor(colors.Color(0.05, 0.07, 0.1))
        for line in lines:
            for wrapped in simpleSplit(_pdf_safe(line) or "-", "Helvetica", TEXT_SIZE, content_width) or [""]:
                c.drawString(MARGIN, y, wrapped)
                y -= TEXT_SIZE + LINE_GAP
        y -= BLOCK_GAP - LINE_GAP

    draw_block("Voo selecionado", _flight_lines(flight_info))
    draw_block(
        "Passageiro",
        [
            f"Nome: {_or_dash(passenger_info.get('nomeCompleto'))}",
            f"CPF: {_or_dash(passenger_info.get('cpf'))}",
            f"Telefone: {_or_dash(passenger_info.get('telefone'))}",
            f"E-mail: {_or_dash(passenger_info.get('email'))}",
        ],
    )
    draw_block(
        "Pagamento",
        [
            f"Método: {_or_dash(payment_info.get('method'))}",
            f"Status: {'Confirmado' if payment_info.get('confirmed') else 'Pendente'}",
        ],
    )

    issued_at = issued_at or datetime.now()
    c.setFont("Helvetica", FOOTER_SIZE)
    c.setFillColor(colors.Color(0.45, 0.48, 0.55))
    c.drawString(MARGIN, MARGIN - 6, f"Emitido em {issued_at.strftime('%d/%m/%Y %H:%M:%S')}")

    c.showPage()
    c.save()
    return buf.getvalue()
