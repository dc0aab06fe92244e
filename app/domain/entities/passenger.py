"""Entidad Passenger - pasajero de una reserva aérea."""

from dataclasses import dataclass, field
from typing import Any

from app.domain.value_objects.passenger_name import PassengerName, sanitize_for_api

DEFAULT_AGE_BAND = "ADT"
DEFAULT_COUNTRY_CODE = "55"


@dataclass
class Phone:
    """Teléfono en el formato del gateway (DDI, DDD, número)."""

    area_code: str | None = None
    number: str | None = None
    country_code: str = DEFAULT_COUNTRY_CODE

    def to_upstream(self) -> dict[str, Any]:
        return {
            "NumeroDDD": self.area_code,
            "NumeroTelefone": self.number,
            "NumeroDDI": self.country_code,
        }


@dataclass
class Passenger:
    """
    Pasajero tal como lo recibe la API.

    Solo se valida presencia; el gateway es quien rechaza datos inválidos.
    Campos no reconocidos se descartan al construir la entidad.
    """

    given_name: str = ""
    family_name: str = ""
    birth_date: str | None = None
    sex: str | None = None
    age_band: str = DEFAULT_AGE_BAND
    national_id: str | None = None
    phone: Phone | None = None
    email: str | None = None
    missing: list[str] = field(default_factory=list, init=False, repr=False, compare=False)

    REQUIRED_FIELDS = ("given_name", "family_name", "birth_date", "sex", "national_id", "email")

    def __post_init__(self) -> None:
        self.missing = [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing

    def to_upstream(self) -> dict[str, Any]:
        """
        Serializa al formato del gateway con nombre y email saneados.

        Claves con valor ``None`` se omiten, igual que un campo ausente.
        """
        name = PassengerName(self.given_name, self.family_name)
        payload: dict[str, Any] = {
            "Nome": name.given_name,
            "Sobrenome": name.family_name,
            "Nascimento": self.birth_date,
            "Sexo": self.sex,
            "FaixaEtaria": self.age_band or DEFAULT_AGE_BAND,
            "CPF": self.national_id,
            "Telefone": self.phone.to_upstream() if self.phone else None,
            "Email": sanitize_for_api(self.email),
        }
        return {key: value for key, value in payload.items() if value is not None}
