from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.envelope import ResponseEnvelope
from src.depends import get_expires_at
from src.domain.errors import ApiError

router = APIRouter(tags=["Not Found"])


@router.get("/{route:path}")
async def not_found(expires_at: int = Depends(get_expires_at)) -> JSONResponse:
    """Any other API path, after authentication succeeded"""
    return ResponseEnvelope.from_error(ApiError.not_found(), expires_at).to_response()
