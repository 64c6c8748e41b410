"""
API Error Taxonomy

Closed set of client-visible failure kinds. Every failure handled by the
service ends up as one of these before it is rendered.
"""

from dataclasses import dataclass
from enum import Enum


class ApiErrorKind(str, Enum):
    """Client-safe failure kinds"""

    BadRequest = "BadRequest"
    DbError = "DbError"
    NotFound = "NotFound"
    Unauthorized = "Unauthorized"
    Expired = "Expired"
    Unexpected = "Unexpected"


_MESSAGES = {
    ApiErrorKind.BadRequest: "Bad Request",
    ApiErrorKind.DbError: "DB Error",
    ApiErrorKind.NotFound: "Not found requested API endpoint",
    ApiErrorKind.Unauthorized: "Unauthorized",
    ApiErrorKind.Expired: "Expired",
    ApiErrorKind.Unexpected: "Unexpected Error",
}


@dataclass(frozen=True)
class ApiError:
    """
    A failure of one operation.

    `detail` is only set for Unexpected and is for the log, never the client.
    """

    kind: ApiErrorKind
    detail: str = ""

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]

    @classmethod
    def bad_request(cls) -> "ApiError":
        return cls(ApiErrorKind.BadRequest)

    @classmethod
    def db_error(cls) -> "ApiError":
        return cls(ApiErrorKind.DbError)

    @classmethod
    def not_found(cls) -> "ApiError":
        return cls(ApiErrorKind.NotFound)

    @classmethod
    def unauthorized(cls) -> "ApiError":
        return cls(ApiErrorKind.Unauthorized)

    @classmethod
    def expired(cls) -> "ApiError":
        return cls(ApiErrorKind.Expired)

    @classmethod
    def unexpected(cls, detail: str) -> "ApiError":
        return cls(ApiErrorKind.Unexpected, detail)


class ApiErrorException(Exception):
    """Raised where a Result cannot be returned (dependencies, route guards)"""

    def __init__(self, error: ApiError):
        self.error = error
        super().__init__(error.message)
