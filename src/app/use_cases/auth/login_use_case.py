"""
Login Use Case

Validates credentials and issues a new session with an encrypted bearer token.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.error_classifier import classify
from src.app.services.password import verify_password
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_timestamp
from src.domain.errors import ApiError
from src.domain.validation import LoginData, LoginDataError
from src.libs.result import Result, Return
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for login and session issuance.

    Business Rules:
    - Credentials are validated before storage is touched (BadRequest)
    - Unknown account and wrong password give the same Unauthorized error
    - Successful login inserts a session expiring one TTL from now
    - The session id is returned only as an encrypted bearer token
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, account: str, pw: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            account: Account name as sent by the client
            pw: Plain text password

        Returns:
            Result with LoginResponse (token and expiry), or ApiError
        """
        try:
            login = LoginData.parse(account, pw)
        except LoginDataError as e:
            logger.warning(f"Rejected login data: {e}")
            return Return.err(classify(e))

        async with self.uow:
            try:
                account_row = await self.uow.accounts.get_by_name(
                    login.account_name.value
                )
            except SQLAlchemyError as e:
                logger.error(f"Error: {e}, while finding account")
                return Return.err(classify(e))

            if account_row is None:
                logger.info("Login failed: unknown account name")
                return Return.err(ApiError.unauthorized())

            if not verify_password(login.password.value, account_row.password_hash):
                logger.warning(f"Login failed: wrong password for account {account_row.id}")
                return Return.err(ApiError.unauthorized())

            account_id = account_row.id
            try:
                session = await self.uow.sessions.create(account_id)
                session_id, expires_at = session.id, session.expires_at
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"Error: {e}, while creating session")
                return Return.err(classify(e))

        session_token = self.token_codec.encode(session_id)
        logger.info(f"Session created for account {account_id}")

        return Return.ok(
            LoginResponse(
                session_token=session_token,
                expires_at=to_timestamp(expires_at),
            )
        )
