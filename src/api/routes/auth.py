from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.api.envelope import ResponseEnvelope
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import LoginUseCase
from src.depends import get_token_codec, get_unit_of_work, limit_login_body

router = APIRouter(tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Fields are optional here; missing values are rejected by the domain
    validation with the same BadRequest as any other invalid input.
    """

    account: Optional[str] = Field(default=None, description="Account name")
    pw: Optional[str] = Field(default=None, description="Account password")


@router.post("/login", dependencies=[Depends(limit_login_body)])
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> JSONResponse:
    """
    Login

    Validates credentials and issues a session token.

    Envelope:
        - data.Login: session_token and expires_at on success
        - error "Bad Request": invalid account name or password format
        - error "Unauthorized": unknown account or wrong password
        - error "DB Error": storage failure
    """
    use_case = LoginUseCase(uow, token_codec)
    result = await use_case.execute(request.account, request.pw)

    # expires_at is only known once a session exists
    expires_at = result.value.expires_at if result.is_ok() else 0
    return ResponseEnvelope.from_result(result, expires_at).to_response()
