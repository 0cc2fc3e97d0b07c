"""Password hashing backed by passlib's bcrypt handlers."""

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from core.config import settings


class BcryptPasswordHasher:
    """Salted bcrypt hashes with a configurable cost factor.

    New hashes use ``bcrypt_sha256``: the password is run through
    HMAC-SHA256 first, so bcrypt's 72-byte input limit never truncates it.
    Plain ``bcrypt`` hashes still verify.
    """

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            default="bcrypt_sha256",
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except (UnknownHashError, ValueError):
            return False
