from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(
        self,
        session: AsyncSession,
        ttl: timedelta,
        sweep_grace: timedelta,
    ):
        self.session = session
        self.ttl = ttl
        self.sweep_grace = sweep_grace

    async def create(self, account_id: UUID) -> Session:
        """Create a new session"""
        session_obj = Session(account_id=account_id, expires_at=utcnow() + self.ttl)
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def refresh(self, session_id: UUID) -> Session:
        """
        Push expires_at to now + TTL in a single UPDATE ... RETURNING.

        NoResultFound propagates when the row vanished after it was fetched.
        """
        stmt = (
            update(Session)
            .where(Session.id == session_id)
            .values(expires_at=utcnow() + self.ttl)
            .returning(Session.account_id, Session.expires_at)
        )
        result = await self.session.execute(stmt)
        row = result.one()
        await self.session.flush()
        return Session(id=session_id, account_id=row.account_id, expires_at=row.expires_at)

    async def sweep(self, now: Optional[datetime] = None) -> int:
        """Delete sessions whose expiry is older than now minus the grace window"""
        # Minus grace: recently expired rows must stay to answer Expired
        threshold = (now or utcnow()) - self.sweep_grace
        stmt = delete(Session).where(Session.expires_at < threshold)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
