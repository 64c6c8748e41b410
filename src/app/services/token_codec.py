"""
Session Token Codec

Encrypts a 16-byte session identifier into an opaque bearer token and back.

Format: urlsafe_base64(nonce || AES-256-GCM(session_id) || tag)

Every decoding failure (alphabet, padding, length, authentication tag,
payload size) raises the same TokenError so callers cannot tell them apart.
"""

import base64
import binascii
import hashlib
import os
import re
from typing import Union
from uuid import UUID

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_SIZE = 12
TAG_SIZE = 16
SESSION_ID_SIZE = 16

_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]+={0,2}")


class TokenError(Exception):
    """Token could not be turned back into a session identifier"""


class TokenCodec:
    """AES-GCM token codec bound to one process-wide secret"""

    def __init__(self, secret: Union[str, bytes]):
        if not secret:
            raise ValueError("Session secret must not be empty")
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        self._aesgcm = AESGCM(hashlib.sha256(secret).digest())

    def encrypt(self, session_id: UUID) -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        return nonce + self._aesgcm.encrypt(nonce, session_id.bytes, None)

    def decrypt(self, token_bytes: bytes) -> UUID:
        if len(token_bytes) != NONCE_SIZE + SESSION_ID_SIZE + TAG_SIZE:
            raise TokenError("Unexpected token length")
        nonce, ciphertext = token_bytes[:NONCE_SIZE], token_bytes[NONCE_SIZE:]
        try:
            plaintext = self._aesgcm.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise TokenError("Token authentication failed") from e
        if len(plaintext) != SESSION_ID_SIZE:
            raise TokenError("Decrypted token is not a session id")
        return UUID(bytes=plaintext)

    def encode(self, session_id: UUID) -> str:
        """Encrypt and base64 (URL-safe) encode for header transport"""
        return base64.urlsafe_b64encode(self.encrypt(session_id)).decode("ascii")

    def decode(self, token: str) -> UUID:
        """Inverse of encode"""
        if not _TOKEN_PATTERN.fullmatch(token):
            raise TokenError("Token is not URL-safe base64")
        try:
            token_bytes = base64.urlsafe_b64decode(token)
        except (binascii.Error, ValueError) as e:
            raise TokenError("Token is not URL-safe base64") from e
        return self.decrypt(token_bytes)
