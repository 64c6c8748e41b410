from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.token_codec import TokenCodec
from src.app.use_cases.auth.dtos import SessionIdentity
from src.domain.errors import ApiError, ApiErrorException


def build_session_maker(db_uri: str) -> sessionmaker:
    engine = create_async_engine(db_uri, echo=False, future=True)
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


async def get_unit_of_work(request: Request):
    async with request.app.state.unit_of_work_factory.open() as uow:
        yield uow


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_current_identity(request: Request) -> SessionIdentity:
    """
    Identity attached by SessionAuthMiddleware.

    Raises:
        ApiErrorException: Unauthorized if the request carries no identity
    """
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise ApiErrorException(ApiError.unauthorized())
    return identity


def get_expires_at(request: Request) -> int:
    return getattr(request.state, "expires_at", 0)


async def limit_login_body(request: Request) -> None:
    """Reject login bodies larger than LOGIN_BODY_LIMIT bytes"""
    body = await request.body()
    if len(body) > request.app.state.login_body_limit:
        raise ApiErrorException(ApiError.bad_request())
