from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator

from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(
        self,
        session: AsyncSession,
        session_ttl: timedelta,
        sweep_grace: timedelta,
    ):
        self.session = session
        self.session_ttl = session_ttl
        self.sweep_grace = sweep_grace

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.sessions = SessionRepository(
            self.session, ttl=self.session_ttl, sweep_grace=self.sweep_grace
        )
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()


class SqlAlchemyUnitOfWorkFactory:
    """Opens a SqlAlchemyUnitOfWork on a fresh AsyncSession"""

    def __init__(
        self,
        session_maker: sessionmaker,
        session_ttl: timedelta,
        sweep_grace: timedelta,
    ):
        self.session_maker = session_maker
        self.session_ttl = session_ttl
        self.sweep_grace = sweep_grace

    @asynccontextmanager
    async def open(self) -> AsyncIterator[SqlAlchemyUnitOfWork]:
        async with self.session_maker() as session:
            yield SqlAlchemyUnitOfWork(session, self.session_ttl, self.sweep_grace)
