from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.envelope import ResponseEnvelope
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import SessionIdentity, SessionInfoUseCase
from src.depends import get_current_identity, get_unit_of_work

router = APIRouter(tags=["Session"])


@router.get("/session")
async def session_info(
    identity: SessionIdentity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> JSONResponse:
    """
    Session Info

    Describes the account of the current (just refreshed) session.
    """
    use_case = SessionInfoUseCase(uow)
    result = await use_case.execute(identity.account_id)
    return ResponseEnvelope.from_result(result, identity.expires_at).to_response()
