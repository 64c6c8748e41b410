"""
Authentication Use Cases

All session-authentication business logic.
"""

from .login_use_case import LoginUseCase
from .authenticate_session_use_case import AuthenticateSessionUseCase
from .sweep_sessions_use_case import SweepSessionsUseCase
from .session_info_use_case import SessionInfoUseCase
from .dtos import LoginResponse, SessionIdentity, SessionInfoResponse

__all__ = [
    # Use Cases
    "LoginUseCase",
    "AuthenticateSessionUseCase",
    "SweepSessionsUseCase",
    "SessionInfoUseCase",
    # DTOs - Responses
    "LoginResponse",
    "SessionInfoResponse",
    # DTOs - Identity
    "SessionIdentity",
]
