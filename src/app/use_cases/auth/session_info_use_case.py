"""
Session Info Use Case

Loads the account behind the current session.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.error_classifier import classify
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ApiError
from src.libs.result import Result, Return
from .dtos import SessionInfoResponse

logger = logging.getLogger(__name__)


class SessionInfoUseCase:
    """
    Use case for describing the logged-in account.

    Business Rules:
    - Account comes from the identity established by the middleware
    - A session whose account no longer exists is Unauthorized
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[SessionInfoResponse]:
        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_id(account_id)
            except SQLAlchemyError as e:
                logger.error(f"Error: {e}, while loading account {account_id}")
                return Return.err(classify(e))

            if account is None:
                logger.warning(f"Session refers to missing account {account_id}")
                return Return.err(ApiError.unauthorized())

            return Return.ok(
                SessionInfoResponse(
                    account_name=account.account_name,
                    preferred_language=account.preferred_language,
                )
            )
