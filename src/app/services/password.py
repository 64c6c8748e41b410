import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plaintext: str) -> str:
    """Bcrypt hash (cost factor 12)"""
    return bcrypt.hashpw(_password_bytes(plaintext), bcrypt.gensalt(12)).decode()


def verify_password(plaintext: str, password_hash: str) -> bool:
    """Check plaintext against a bcrypt hash; malformed hashes never verify"""
    try:
        return bcrypt.checkpw(_password_bytes(plaintext), password_hash.encode())
    except ValueError:
        logger.error("Stored password hash is malformed")
        return False
