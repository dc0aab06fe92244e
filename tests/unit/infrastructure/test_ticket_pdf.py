from datetime import datetime

from app.infrastructure.documents.ticket_pdf import (
    build_ticket_filename,
    render_ticket_document,
    sanitize_filename,
    to_iso_date,
)

FLIGHT = {
    "airlineLine": "LATAM • LA3456",
    "routeLine": "GRU → REC",
    "date": "15/04/2026",
    "depart": "08:10",
    "arrive": "11:25",
    "duration": "3h15",
}
PASSENGER = {"nomeCompleto": "Maria da Silva", "cpf": "123.456.789-09"}


def test_render_returns_pdf_bytes():
    content = render_ticket_document(FLIGHT, PASSENGER, {"method": "pix", "confirmed": True})

    assert content.startswith(b"%PDF")
    assert len(content) > 500


def test_render_tolerates_empty_sections():
    assert render_ticket_document({}, {}, {}).startswith(b"%PDF")


def test_filename_from_route_line():
    assert build_ticket_filename(FLIGHT, PASSENGER) == "bilhete_Maria_da_Silva_GRU-REC_2026-04-15.pdf"


def test_filename_defaults():
    filename = build_ticket_filename({}, {}, today=datetime(2026, 3, 1))

    assert filename == "bilhete_passageiro_voo_2026-03-01.pdf"


def test_filename_prefers_origin_destination():
    flight = {"origin": "GIG", "destination": "POA", "date": "01/05/2026"}

    assert build_ticket_filename(flight, PASSENGER) == "bilhete_Maria_da_Silva_GIG-POA_2026-05-01.pdf"


def test_to_iso_date():
    assert to_iso_date("qua, 15/04/2026") == "2026-04-15"
    assert to_iso_date("2026-04-15") == ""
    assert to_iso_date(None) == ""


def test_sanitize_filename():
    assert sanitize_filename("  João / Pereira!! ") == "João_Pereira"
    assert sanitize_filename("") == "documento"
