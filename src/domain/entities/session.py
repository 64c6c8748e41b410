"""
Session Entity

Server-side record behind an encrypted bearer token.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Session(SQLModel, table=True):
    """
    Session entity - binds an opaque identifier to an account and an expiry.

    Business Rules:
    - id is generated on insert and never reused
    - expires_at only moves forward, by refresh (now + TTL)
    - Rows past expiry plus the sweep grace window are deleted
    """

    __tablename__ = "session"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_id: UUID = Field(foreign_key="account.id", nullable=False, index=True)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
