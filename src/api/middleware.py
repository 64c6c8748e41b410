"""
Session Authentication Middleware

Per-request flow for paths under the API prefix:

    ENTRY -> (LOGIN_BYPASS | AUTHENTICATING) -> SWEEPING -> DISPATCHING

Login skips authentication. Every other API request needs
`Authorization: Bearer <token>` naming a live session, which is refreshed
and attached to `request.state.identity`. Outdated sessions are swept on
every API request. Failures before dispatch are rendered here as envelopes.
Handlers wrap their own results with `ResponseEnvelope.from_result`; the
middleware does not re-wrap responses, so every route under the prefix
must return an envelope. Paths outside the prefix pass through untouched.
"""

import logging
import re
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWorkFactory
from src.api.envelope import ResponseEnvelope
from src.app.services.error_classifier import classify
from src.app.services.token_codec import TokenCodec
from src.app.use_cases.auth import (
    AuthenticateSessionUseCase,
    SessionIdentity,
    SweepSessionsUseCase,
)
from src.domain.errors import ApiError
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"Bearer (.+)")


def extract_bearer_token(raw_header: Optional[bytes]) -> Optional[str]:
    """Token from a raw Authorization header value, or None if unusable"""
    if raw_header is None:
        return None
    try:
        value = raw_header.decode("utf-8")
    except UnicodeDecodeError:
        return None
    match = BEARER_PATTERN.fullmatch(value)
    if match is None:
        return None
    return match.group(1)


def _raw_authorization_header(request: Request) -> Optional[bytes]:
    # Starlette decodes headers as latin-1; the raw bytes are checked for UTF-8
    for key, value in request.headers.raw:
        if key.lower() == b"authorization":
            return value
    return None


class SessionAuthMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        api_prefix: str,
        unit_of_work_factory: SqlAlchemyUnitOfWorkFactory,
        token_codec: TokenCodec,
    ):
        super().__init__(app)
        self.api_prefix = api_prefix.rstrip("/")
        self.login_path = f"{self.api_prefix}/login"
        self.unit_of_work_factory = unit_of_work_factory
        self.token_codec = token_codec

    def is_api_path(self, path: str) -> bool:
        return path == self.api_prefix or path.startswith(self.api_prefix + "/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.is_api_path(request.url.path):
            return await call_next(request)

        if request.url.path == self.login_path:
            # Login carries no prior session
            request.state.expires_at = 0
        else:
            auth_result = await self.authenticate(request)
            if auth_result.is_err():
                return self.early_error(auth_result.error)
            identity = auth_result.value
            request.state.identity = identity
            request.state.expires_at = identity.expires_at

        sweep_result = await self.sweep()
        if sweep_result.is_err():
            return self.early_error(sweep_result.error)

        try:
            return await call_next(request)
        except Exception as e:
            error = classify(e)
            logger.exception(
                f"Unhandled error on {request.method} {request.url.path}: {error.detail}"
            )
            return self.early_error(error)

    async def authenticate(self, request: Request) -> Result[SessionIdentity]:
        client = request.client.host if request.client else None
        session_token = extract_bearer_token(_raw_authorization_header(request))
        if session_token is None:
            logger.warning(
                f"Error: Authorization header missing or without `Bearer` token, IP: {client}"
            )
            return Return.err(ApiError.unauthorized())

        async with self.unit_of_work_factory.open() as uow:
            result = await AuthenticateSessionUseCase(uow, self.token_codec).execute(
                session_token
            )
        if result.is_err():
            logger.warning(f"Authentication failed ({result.error.kind.value}), IP: {client}")
        return result

    async def sweep(self) -> Result[int]:
        async with self.unit_of_work_factory.open() as uow:
            return await SweepSessionsUseCase(uow).execute()

    @staticmethod
    def early_error(error: ApiError) -> Response:
        return ResponseEnvelope.from_error(error).to_response()
