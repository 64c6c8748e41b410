"""
Response Envelope

Uniform wire shape for every JSON response under the API prefix:

    {"error": str, "expires_at": int, "data": {<Variant>: payload}}

The transport status is fixed by `ResponseEnvelope.status_code` (always 200);
failures are reported only in `error`, with the empty `{"None": []}` variant.
"""

from typing import Any, ClassVar, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.app.use_cases.auth.dtos import LoginResponse, SessionInfoResponse
from src.domain.errors import ApiError
from src.libs.result import Result

EMPTY_VARIANT = "None"

_VARIANT_TAGS = {
    LoginResponse: "Login",
    SessionInfoResponse: "Session",
}


def payload_variant(payload: Optional[BaseModel]) -> Dict[str, Any]:
    """Tag a handler payload with its variant name"""
    if payload is None:
        return {EMPTY_VARIANT: []}
    tag = _VARIANT_TAGS.get(type(payload))
    if tag is None:
        raise TypeError(f"No envelope variant for {type(payload).__name__}")
    return {tag: payload.model_dump(mode="json")}


class ResponseEnvelope(BaseModel):
    error: str = ""
    expires_at: int = 0
    data: Dict[str, Any] = {EMPTY_VARIANT: []}

    status_code: ClassVar[int] = status.HTTP_200_OK

    @classmethod
    def from_error(cls, error: ApiError, expires_at: int = 0) -> "ResponseEnvelope":
        return cls(error=error.message, expires_at=expires_at)

    @classmethod
    def from_result(cls, result: Result, expires_at: int = 0) -> "ResponseEnvelope":
        if result.is_err():
            return cls.from_error(result.error, expires_at)
        return cls(expires_at=expires_at, data=payload_variant(result.value))

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.model_dump())
