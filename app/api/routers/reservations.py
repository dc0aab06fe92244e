from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from app.api.dependencies import get_use_cases
from app.api.schemas.reservations import DirectIssueRequest, IssueRequest, ReserveRequest
from app.application.dtos.booking_dto import ReserveCommand

router = APIRouter()


def _command(payload: ReserveRequest, **overrides) -> ReserveCommand:
    return ReserveCommand(
        payload=payload.raw_payload(),
        passengers=payload.passenger_entities(),
        service_charge=payload.service_charge,
        **overrides,
    )


@router.post("/reservar", status_code=status.HTTP_200_OK)
async def reserve(
    payload: ReserveRequest | None = None,
    mock: str | None = Query(default=None),
    ident: str | None = Query(default=None),
    header_ident: str | None = Header(default=None, alias="X-Mock-Identificacao"),
    use_cases=Depends(get_use_cases),
):
    command = _command(
        payload or ReserveRequest(),
        header_identifier=header_ident,
        query_identifier=ident,
        force_mock=mock == "1",
    )
    result = await use_cases["booking"].reserve(command)
    return result.raw


@router.get("/reservar/check", status_code=status.HTTP_200_OK)
async def reserve_check(use_cases=Depends(get_use_cases)) -> dict:
    return use_cases["booking"].check_readiness()


@router.post("/emitir", status_code=status.HTTP_200_OK)
async def issue(
    payload: IssueRequest | None = None,
    use_cases=Depends(get_use_cases),
):
    result = await use_cases["booking"].issue((payload or IssueRequest()).locator)
    return result.raw


@router.post("/emitir-direct", status_code=status.HTTP_200_OK)
async def issue_direct(
    payload: DirectIssueRequest | None = None,
    use_cases=Depends(get_use_cases),
) -> dict:
    payload = payload or DirectIssueRequest()
    result = await use_cases["booking"].reserve_and_issue(_command(payload), locator=payload.locator)

    response = {"localizador": result.locator, "issue": result.issuance.raw}
    if result.raw is not None:
        response["reserve"] = result.raw
    if result.issuance.ticket_number:
        response["numeroBilhete"] = result.issuance.ticket_number
    return response


@router.get("/debug/last-reserve", status_code=status.HTTP_200_OK)
async def last_reserve_debug(use_cases=Depends(get_use_cases)) -> dict:
    snapshot = use_cases["booking"].state.last_snapshot
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Nenhuma reserva registrada ainda.",
        )
    return snapshot.to_dict()
