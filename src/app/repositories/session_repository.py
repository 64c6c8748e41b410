from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, account_id: UUID) -> Session:
        """Insert a new session expiring one TTL from now"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def refresh(self, session_id: UUID) -> Session:
        """Reset expires_at to now + TTL and return the updated row.
        Raises if the row no longer exists."""
        pass

    @abstractmethod
    async def sweep(self, now: Optional[datetime] = None) -> int:
        """Delete sessions expired for longer than the grace window.
        Returns count of deleted rows."""
        pass
