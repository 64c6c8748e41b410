"""
Account Entity

Owned by account administration; read-only for session authentication.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Account(SQLModel, table=True):
    """
    Account entity - a login identity.

    Business Rules:
    - account_name is unique
    - Password stored as bcrypt hash
    """

    __tablename__ = "account"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_name: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    preferred_language: str = Field(default="en", max_length=16)
