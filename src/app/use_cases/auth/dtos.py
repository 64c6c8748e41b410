"""
Authentication Use Case DTOs (Data Transfer Objects)

Payloads returned by auth use cases. LoginResponse and SessionInfoResponse
are the data variants rendered inside the response envelope.
"""

from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for login use case"""

    session_token: str
    expires_at: int


class SessionInfoResponse(BaseModel):
    """Response for session info use case"""

    account_name: str
    preferred_language: str


# ============================================================================
# Request-scoped identity
# ============================================================================


class SessionIdentity(BaseModel):
    """Identity established from a valid bearer token for one request"""

    session_id: UUID
    account_id: UUID
    expires_at: int
