"""
Sweep Sessions Use Case

Deletes sessions that expired longer ago than the grace window.
Runs inline on every API request instead of on a timer.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.error_classifier import classify
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)


class SweepSessionsUseCase:
    """Use case for purging outdated sessions"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[int]:
        async with self.uow:
            try:
                deleted = await self.uow.sessions.sweep()
                await self.uow.commit()
            except SQLAlchemyError as e:
                logger.error(f"Error: {e}, while deleting sessions")
                return Return.err(classify(e))

        if deleted:
            logger.debug(f"Swept {deleted} outdated session(s)")
        return Return.ok(deleted)
