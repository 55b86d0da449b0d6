#!/usr/bin/env python3
"""
Admin service - account management and platform statistics.
"""

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth import TokenClaims, hash_password
from core.relevance import Role
from database.models import User
from database.repositories import ApplicationRepository, JobRepository, ResumeRepository, UserRepository
from ..models.requests import UserCreateRequest, UserUpdateRequest
from ..models.responses import (
    AdminStatsResponse,
    AdminUserCreatedResponse,
    AdminUserItem,
    AdminUserListResponse,
    AdminUserUpdateResponse,
    DeleteResponse
)
from ..utils import next_offset, safe_datetime_iso, utc_now_iso
from ..exceptions import ConflictException, NotFoundException, ValidationException
from .auth_service import require_field

logger = logging.getLogger(__name__)


def check_role(role: str) -> None:
    if role not in Role.values():
        raise ValidationException(
            f"Role must be one of: {', '.join(Role.values())}",
            code="INVALID_ROLE",
            field="role"
        )


def admin_user_item(user: User) -> AdminUserItem:
    return AdminUserItem(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        created_at=safe_datetime_iso(user.created_at)
    )


class AdminService:
    """Service behind the admin-only endpoints."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.resumes = ResumeRepository(db)
        self.jobs = JobRepository(db)
        self.applications = ApplicationRepository(db)

    def get_or_404(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")
        return user

    def list_users(self, limit: int, offset: int) -> AdminUserListResponse:
        rows, total = self.users.list_users(limit=limit, offset=offset)
        return AdminUserListResponse(
            items=[admin_user_item(row) for row in rows],
            next_offset=next_offset(offset, limit, total),
            total=total
        )

    def create_user(self, request: UserCreateRequest) -> AdminUserCreatedResponse:
        """
        Create an account of any role.

        Raises:
            ValidationException: Missing field (FIELD_REQUIRED) or unknown role (INVALID_ROLE).
            ConflictException: Email already registered (EMAIL_EXISTS).
        """
        name = require_field(request.name, "name")
        email = require_field(request.email, "email")
        password = require_field(request.password, "password")
        role = request.role or Role.USER.value
        check_role(role)

        if self.users.email_exists(email):
            raise ConflictException("Email already exists", code="EMAIL_EXISTS", field="email")

        try:
            user = self.users.create_user(email=email, password_hash=hash_password(password), name=name, role=role)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("Email already exists", code="EMAIL_EXISTS", field="email")

        return AdminUserCreatedResponse(
            **admin_user_item(user).model_dump(),
            message="User created successfully"
        )

    def update_user(self, user_id: int, request: UserUpdateRequest) -> AdminUserUpdateResponse:
        """
        Apply a partial account update. A new password is stored hashed.

        Raises:
            NotFoundException: Unknown account.
            ValidationException: Unknown role (INVALID_ROLE) or nothing to change (NO_UPDATES).
            ConflictException: Email taken by another account (EMAIL_EXISTS).
        """
        user = self.get_or_404(user_id)

        updates = request.model_dump(exclude_none=True)
        if not updates:
            raise ValidationException("No valid fields to update", code="NO_UPDATES")

        if 'role' in updates:
            check_role(updates['role'])
        if 'email' in updates:
            other = self.users.get_by_email(updates['email'])
            if other is not None and other.id != user.id:
                raise ConflictException("Email already exists", code="EMAIL_EXISTS", field="email")
        if 'password' in updates:
            updates['password_hash'] = hash_password(updates.pop('password'))

        try:
            updated = self.users.update_user(user, updates)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("Email already exists", code="EMAIL_EXISTS", field="email")

        logger.info(f"Account {user_id} updated: {', '.join(updated)}")
        return AdminUserUpdateResponse(
            id=user_id,
            message="User updated successfully",
            updated_fields=['password' if name == 'password_hash' else name for name in updated]
        )

    def delete_user(self, admin: TokenClaims, user_id: int) -> DeleteResponse:
        """
        Delete an account with its resumes, jobs and applications.

        Raises:
            ValidationException: Admin tried to delete their own account (CANNOT_DELETE_SELF).
            NotFoundException: Unknown account.
        """
        if user_id == admin.user_id:
            raise ValidationException("Cannot delete your own account", code="CANNOT_DELETE_SELF")

        user = self.get_or_404(user_id)
        self.users.delete_user(user)
        self.db.commit()
        return DeleteResponse(message="User deleted successfully", id=user_id)

    def stats(self) -> AdminStatsResponse:
        return AdminStatsResponse(
            total_users=self.users.count(),
            total_resumes=self.resumes.count(),
            total_jobs=self.jobs.count(),
            total_applications=self.applications.count(),
            applications_by_status=self.applications.status_breakdown(),
            generated_at=utc_now_iso()
        )
