"""
Error Classifier

Maps raised exceptions to the client-safe ApiError taxonomy. Details of
storage and unexpected failures stay in the log.
"""

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.token_codec import TokenError
from src.domain.errors import ApiError, ApiErrorException
from src.domain.validation import LoginDataError


def classify(exc: BaseException) -> ApiError:
    if isinstance(exc, ApiErrorException):
        return exc.error
    if isinstance(exc, SQLAlchemyError):
        return ApiError.db_error()
    if isinstance(exc, TokenError):
        return ApiError.unauthorized()
    if isinstance(exc, LoginDataError):
        return ApiError.bad_request()
    return ApiError.unexpected(f"{type(exc).__name__}: {exc}")
