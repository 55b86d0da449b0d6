"""
Password hashing and signed access tokens.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import bcrypt
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

logger = logging.getLogger(__name__)


class AuthError(Exception):
    pass


class TokenExpired(AuthError):
    pass


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


@dataclass
class TokenClaims:
    user_id: int
    email: str
    role: str


class TokenSigner:
    """Issue and verify time-limited bearer tokens."""

    def __init__(self, secret_key: str, max_age_seconds: int = 86400, salt: str = "access-token"):
        self.serializer = URLSafeTimedSerializer(secret_key, salt=salt)
        self.max_age_seconds = max_age_seconds

    def issue(self, user_id: int, email: str, role: str) -> str:
        return self.serializer.dumps({"user_id": user_id, "email": email, "role": role})

    def verify(self, token: str, max_age_seconds: Optional[int] = None) -> TokenClaims:
        """
        Decode a token.

        Raises:
            TokenExpired: If the token is older than max_age_seconds.
            AuthError: If the signature or payload is invalid.
        """
        max_age = max_age_seconds if max_age_seconds is not None else self.max_age_seconds
        try:
            data = self.serializer.loads(token, max_age=max_age)
        except SignatureExpired as e:
            raise TokenExpired("Token expired") from e
        except BadSignature as e:
            raise AuthError("Invalid token") from e

        try:
            return TokenClaims(user_id=int(data["user_id"]), email=data["email"], role=data["role"])
        except (KeyError, TypeError, ValueError) as e:
            raise AuthError("Malformed token payload") from e
