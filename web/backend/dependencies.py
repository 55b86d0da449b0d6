#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Callable, Generator, Optional
from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from core.auth import AuthError, TokenClaims, TokenExpired, TokenSigner
from database.database import build_engine, build_session_factory
from .config import get_config
from .exceptions import AuthenticationException, ForbiddenException, InvalidTokenException
from .services.idempotency_service import IdempotentRequest


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, url: Optional[str] = None):
        self.engine = build_engine(url or get_config().database.url)
        self.SessionLocal = build_session_factory(self.engine)

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


# Global database manager instance
_db_manager = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from _db_manager.get_session()


def get_db_manager() -> DatabaseManager:
    return _db_manager


@lru_cache()
def get_token_signer() -> TokenSigner:
    auth = get_config().auth
    return TokenSigner(auth.secret_key, max_age_seconds=auth.token_max_age_seconds)


_bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    signer: TokenSigner = Depends(get_token_signer)
) -> TokenClaims:
    """
    Resolve the caller from the Authorization header.

    Raises:
        AuthenticationException: No bearer token was sent (401).
        InvalidTokenException: The token is expired or tampered with (403).
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Access token required")

    try:
        return signer.verify(credentials.credentials)
    except TokenExpired:
        raise InvalidTokenException("Token expired")
    except AuthError:
        raise InvalidTokenException("Invalid or expired token")


def require_roles(*roles: str) -> Callable[..., TokenClaims]:
    """Dependency factory that admits only the given roles."""

    def checker(current_user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if current_user.role not in roles:
            raise ForbiddenException(f"Requires role: {' or '.join(roles)}")
        return current_user

    return checker


def get_idempotent_request(
    request: Request,
    idempotency_key: Optional[str] = Header(default=None, alias="Idempotency-Key")
) -> Optional[IdempotentRequest]:
    """Pair the Idempotency-Key header with the method and path it was sent to."""
    if idempotency_key is None or not idempotency_key.strip():
        return None
    return IdempotentRequest(key=idempotency_key, endpoint=f"{request.method} {request.url.path}")
