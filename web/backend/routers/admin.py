#!/usr/bin/env python3
"""
Admin endpoints - manage accounts and view platform statistics.
"""

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from ..dependencies import get_db, require_roles
from ..services.admin_service import AdminService
from ..models.requests import UserCreateRequest, UserUpdateRequest
from ..models.responses import (
    AdminStatsResponse,
    AdminUserCreatedResponse,
    AdminUserListResponse,
    AdminUserUpdateResponse,
    DeleteResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

admin_only = require_roles("admin")


@router.get("/users", response_model=AdminUserListResponse)
def list_users(
    limit: int = Query(default=10, ge=1, le=100, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Rows to skip"),
    current_user: TokenClaims = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """List accounts newest first."""
    return AdminService(db).list_users(limit=limit, offset=offset)


@router.post("/users", response_model=AdminUserCreatedResponse, status_code=201)
def create_user(
    body: UserCreateRequest,
    current_user: TokenClaims = Depends(admin_only),
    db: Session = Depends(get_db)
):
    return AdminService(db).create_user(body)


@router.patch("/users/{user_id}", response_model=AdminUserUpdateResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    current_user: TokenClaims = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Change name, email, role or password. Only provided fields change."""
    return AdminService(db).update_user(user_id, body)


@router.delete("/users/{user_id}", response_model=DeleteResponse)
def delete_user(
    user_id: int,
    current_user: TokenClaims = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Delete an account together with its resumes, jobs and applications."""
    return AdminService(db).delete_user(current_user, user_id)


@router.get("/stats", response_model=AdminStatsResponse)
def platform_stats(
    current_user: TokenClaims = Depends(admin_only),
    db: Session = Depends(get_db)
):
    """Totals per table and application counts per status."""
    return AdminService(db).stats()
