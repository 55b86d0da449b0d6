#!/usr/bin/env python3
"""
Auth service - registration, login and profile lookup.
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth import TokenClaims, TokenSigner, hash_password, verify_password
from core.relevance import Role
from database.models import User
from database.repositories import UserRepository
from ..models.requests import RegisterRequest, LoginRequest
from ..models.responses import AuthResponse, MeResponse, UserResponse
from ..exceptions import (
    AuthenticationException,
    ConflictException,
    NotFoundException,
    ValidationException
)

logger = logging.getLogger(__name__)


def require_field(value: Optional[str], field: str) -> str:
    """Return value, or raise FIELD_REQUIRED when it is missing or blank."""
    if value is None or not value.strip():
        raise ValidationException(f"{field} is required", field=field)
    return value


def user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, email=user.email, name=user.name, role=user.role)


class AuthService:
    """Service for account registration and authentication."""

    def __init__(self, db: Session, signer: TokenSigner):
        self.db = db
        self.users = UserRepository(db)
        self.signer = signer

    def _issue(self, user: User) -> AuthResponse:
        token = self.signer.issue(user.id, user.email, user.role)
        return AuthResponse(user=user_response(user), token=token)

    def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and return it with a fresh token.

        Raises:
            ValidationException: Missing field (FIELD_REQUIRED) or unknown role (INVALID_ROLE).
            ConflictException: Email already registered (USER_EXISTS).
        """
        email = require_field(request.email, "email")
        password = require_field(request.password, "password")
        name = require_field(request.name, "name")
        role = request.role or Role.USER.value

        if role not in Role.values():
            raise ValidationException(
                f"Role must be one of: {', '.join(Role.values())}",
                code="INVALID_ROLE",
                field="role"
            )

        if self.users.email_exists(email):
            raise ConflictException("User already exists", code="USER_EXISTS", field="email")

        try:
            user = self.users.create_user(
                email=email,
                password_hash=hash_password(password),
                name=name,
                role=role
            )
            self.db.commit()
        except IntegrityError:
            # Concurrent registration with the same email
            self.db.rollback()
            raise ConflictException("User already exists", code="USER_EXISTS", field="email")

        logger.info(f"Registered user {user.id} with role {role}")
        return self._issue(user)

    def login(self, request: LoginRequest) -> AuthResponse:
        """
        Check credentials and return the account with a fresh token.

        Raises:
            ValidationException: Missing email or password.
            AuthenticationException: Unknown email or wrong password (INVALID_CREDENTIALS).
        """
        email = require_field(request.email, "email")
        password = require_field(request.password, "password")

        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise AuthenticationException("Invalid email or password", code="INVALID_CREDENTIALS")

        return self._issue(user)

    def me(self, claims: TokenClaims) -> MeResponse:
        user = self.users.get_by_id(claims.user_id)
        if user is None:
            raise NotFoundException("User not found")
        return MeResponse(user=user_response(user))
