"""
Login Data Validation

Domain rules for credentials, checked before any storage access.
Grapheme clusters are counted with the `regex` module (\\X).
"""

from dataclasses import dataclass
from typing import Optional

import regex

ACCOUNT_NAME_MAX_GRAPHEMES = 20
PASSWORD_MIN_GRAPHEMES = 8
PASSWORD_MAX_GRAPHEMES = 48
FORBIDDEN_ACCOUNT_NAME_CHARACTERS = frozenset('/()"<>\\{};')

_GRAPHEME = regex.compile(r"\X")


class LoginDataError(ValueError):
    """Credentials failed a domain rule. The message is for logs only."""


def grapheme_count(value: str) -> int:
    return len(_GRAPHEME.findall(value))


@dataclass(frozen=True)
class AccountName:
    value: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "AccountName":
        if raw is None:
            raise LoginDataError("Missing account name field")
        if not raw.strip():
            raise LoginDataError("Missing account name")
        if grapheme_count(raw) > ACCOUNT_NAME_MAX_GRAPHEMES:
            raise LoginDataError("Account name too long")
        if any(c in FORBIDDEN_ACCOUNT_NAME_CHARACTERS for c in raw):
            raise LoginDataError("Account name contains invalid chars")
        return cls(raw)


@dataclass(frozen=True)
class AccountPassword:
    value: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "AccountPassword":
        if raw is None:
            raise LoginDataError("Missing pw field")
        if not raw.strip():
            raise LoginDataError("Missing pw")
        count = grapheme_count(raw)
        if count > PASSWORD_MAX_GRAPHEMES:
            raise LoginDataError("Password too long")
        if count < PASSWORD_MIN_GRAPHEMES:
            raise LoginDataError("Password too short")
        return cls(raw)

    def __repr__(self) -> str:
        return "AccountPassword(***)"


@dataclass(frozen=True)
class LoginData:
    account_name: AccountName
    password: AccountPassword

    @classmethod
    def parse(cls, account: Optional[str], pw: Optional[str]) -> "LoginData":
        return cls(
            account_name=AccountName.parse(account),
            password=AccountPassword.parse(pw),
        )
