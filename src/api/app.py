import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWorkFactory
from src.api.envelope import ResponseEnvelope
from src.api.middleware import SessionAuthMiddleware
from src.app.services.token_codec import TokenCodec
from src.depends import build_session_maker, get_expires_at
from src.domain.errors import ApiError, ApiErrorException

logger = logging.getLogger(__name__)


async def handle_api_error(request: Request, exc: ApiErrorException):
    logger.warning(f"API error: {exc.error.kind.value} on {request.url.path}")
    return ResponseEnvelope.from_error(exc.error, get_expires_at(request)).to_response()


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(f"Request validation failed on {request.url.path}: {exc.errors()}")
    return ResponseEnvelope.from_error(
        ApiError.bad_request(), get_expires_at(request)
    ).to_response()


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    api_prefix = request.app.state.api_prefix
    if not (request.url.path == api_prefix or request.url.path.startswith(api_prefix + "/")):
        return await http_exception_handler(request, exc)
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}")
    error = ApiError.not_found() if exc.status_code in (404, 405) else ApiError.bad_request()
    return ResponseEnvelope.from_error(error, get_expires_at(request)).to_response()


def create_app(ApplicationConfig, session_maker: Optional[sessionmaker] = None) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = FastAPI(title="Session API", version="0.1.0")

    api_prefix = ApplicationConfig.API_PREFIX.rstrip("/")
    unit_of_work_factory = SqlAlchemyUnitOfWorkFactory(
        session_maker or build_session_maker(ApplicationConfig.DB_URI),
        session_ttl=timedelta(minutes=ApplicationConfig.SESSION_TTL_MINUTES),
        sweep_grace=timedelta(minutes=ApplicationConfig.SESSION_SWEEP_GRACE_MINUTES),
    )
    token_codec = TokenCodec(ApplicationConfig.SESSION_SECRET)

    app.state.api_prefix = api_prefix
    app.state.unit_of_work_factory = unit_of_work_factory
    app.state.token_codec = token_codec
    app.state.login_body_limit = ApplicationConfig.LOGIN_BODY_LIMIT

    # Added first so CORS stays outermost and answers preflights itself
    app.add_middleware(
        SessionAuthMiddleware,
        api_prefix=api_prefix,
        unit_of_work_factory=unit_of_work_factory,
        token_codec=token_codec,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check, not_found, session

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=api_prefix, tags=["Authentication"])
    app.include_router(session.router, prefix=api_prefix, tags=["Session"])
    # Catch-all, must stay last
    app.include_router(not_found.router, prefix=api_prefix, tags=["Not Found"])

    app.add_exception_handler(ApiErrorException, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)

    return app
