import json
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from app.domain.entities.passenger import DEFAULT_AGE_BAND, DEFAULT_COUNTRY_CODE, Passenger, Phone


class PhoneIn(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    country_code: str | None = Field(default=None, alias="NumeroDDI")
    area_code: str | None = Field(default=None, alias="NumeroDDD")
    number: str | None = Field(default=None, alias="NumeroTelefone")

    def to_entity(self) -> Phone:
        return Phone(
            area_code=self.area_code,
            number=self.number,
            country_code=self.country_code or DEFAULT_COUNTRY_CODE,
        )


class PassengerIn(BaseModel):
    """
    Pasajero en el formato del gateway. Solo se valida presencia más
    adelante; campos desconocidos se descartan.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    given_name: str | None = Field(default=None, alias="Nome")
    family_name: str | None = Field(default=None, alias="Sobrenome")
    birth_date: str | None = Field(default=None, alias="Nascimento")
    sex: str | None = Field(default=None, alias="Sexo")
    age_band: str | None = Field(default=None, alias="FaixaEtaria")
    national_id: str | None = Field(default=None, alias="CPF")
    phone: PhoneIn | None = Field(default=None, alias="Telefone")
    email: str | None = Field(default=None, alias="Email")

    def to_entity(self) -> Passenger:
        return Passenger(
            given_name=self.given_name or "",
            family_name=self.family_name or "",
            birth_date=self.birth_date,
            sex=self.sex,
            age_band=self.age_band or DEFAULT_AGE_BAND,
            national_id=self.national_id,
            phone=self.phone.to_entity() if self.phone else None,
            email=self.email,
        )


def _coerce_passenger_list(value: Any) -> Any:
    # Passageiros llega a veces como string JSON (formularios).
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if value is None or not isinstance(value, list):
        return []
    return value


class ReserveRequest(BaseModel):
    """
    Body de /reservar. Se conservan los campos extra: el identificador de
    viaje se resuelve sobre el body completo y se usa en el preview de debug.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    passengers: list[PassengerIn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("passengers", "Passageiros"),
    )
    service_charge: Any = Field(default=None, alias="CobrancaDeServico")

    @field_validator("passengers", mode="before")
    @classmethod
    def _parse_passengers(cls, value: Any) -> Any:
        return _coerce_passenger_list(value)

    def raw_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def passenger_entities(self) -> list[Passenger]:
        return [passenger.to_entity() for passenger in self.passengers]


class IssueRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    locator: str | None = Field(default=None, validation_alias=AliasChoices("localizador", "Localizador"))


class DirectIssueRequest(ReserveRequest):
    """Body de /emitir-direct: localizador opcional más el body de reserva."""

    locator: str | None = Field(default=None, validation_alias=AliasChoices("localizador", "Localizador"))

