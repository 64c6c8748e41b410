"""
Authenticate Session Use Case

Turns a bearer token into a request identity, refreshing the session.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.error_classifier import classify
from src.app.services.token_codec import TokenCodec, TokenError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_timestamp, utcnow
from src.domain.errors import ApiError
from src.libs.result import Result, Return
from .dtos import SessionIdentity

logger = logging.getLogger(__name__)


class AuthenticateSessionUseCase:
    """
    Use case for validating and refreshing a session.

    Business Rules:
    - Any token defect is Unauthorized, with no finer distinction
    - Unknown session is Unauthorized
    - Session past expires_at is Expired (the client should log in again)
    - A live session is pushed to now + TTL before the request proceeds

    Fetch and refresh run as two statements; two requests with the same
    token may both refresh, the later write wins.
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, session_token: str) -> Result[SessionIdentity]:
        """
        Execute session authentication.

        Args:
            session_token: Bearer token taken from the Authorization header

        Returns:
            Result with SessionIdentity (account and new expiry), or ApiError
        """
        try:
            session_id = self.token_codec.decode(session_token)
        except TokenError as e:
            logger.warning(f"Failed to decode session token: {e}")
            return Return.err(classify(e))

        async with self.uow:
            try:
                session = await self.uow.sessions.get_by_id(session_id)
            except SQLAlchemyError as e:
                logger.error(f"Error: {e}, while finding session {session_id}")
                return Return.err(classify(e))

            if session is None:
                logger.warning(f"Failed to find session {session_id}")
                return Return.err(ApiError.unauthorized())

            if session.expires_at < utcnow():
                logger.info(f"Session {session_id} expired")
                return Return.err(ApiError.expired())

            try:
                refreshed = await self.uow.sessions.refresh(session_id)
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"Error: {e}, while updating session {session_id}")
                return Return.err(classify(e))

        return Return.ok(
            SessionIdentity(
                session_id=session_id,
                account_id=refreshed.account_id,
                expires_at=to_timestamp(refreshed.expires_at),
            )
        )
