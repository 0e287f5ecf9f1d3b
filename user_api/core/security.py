# File: user_api/core/security.py

"""
Security helpers for the user API.

  - PasswordHasher: bcrypt hashing with a per-password random salt
  - TokenService: HS256 JWT access tokens with a fixed one hour lifetime
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import jwt

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plain password against a stored hash.

        A malformed hash counts as a mismatch rather than an error.
        """
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
        except ValueError:
            return False


class TokenService:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = ALGORITHM,
        expires_delta: Optional[timedelta] = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    def create_access_token(self, data: dict) -> str:
        to_encode: dict[str, Any] = data.copy()
        now = datetime.now(timezone.utc)
        to_encode["iat"] = now
        to_encode["exp"] = now + self.expires_delta
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> dict[str, Any]:
        """
        Decode and verify a token (signature and expiry).

        Raises jose.JWTError (ExpiredSignatureError, JWTClaimsError...) when
        the token cannot be trusted.
        """
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
