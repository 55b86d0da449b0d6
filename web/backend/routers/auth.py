#!/usr/bin/env python3
"""
Auth endpoints - register, login and current profile.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import TokenClaims, TokenSigner
from ..dependencies import get_current_user, get_db, get_idempotent_request, get_token_signer
from ..services.auth_service import AuthService
from ..config import get_config
from ..services.idempotency_service import IdempotencyService, IdempotentRequest, anonymous_scope
from ..models.requests import RegisterRequest, LoginRequest
from ..models.responses import AuthResponse, MeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    body: RegisterRequest,
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    signer: TokenSigner = Depends(get_token_signer),
    db: Session = Depends(get_db)
):
    """
    Create an account.

    Role defaults to "user". Returns the account and a bearer token.
    """
    service = AuthService(db, signer)
    return IdempotencyService(db).run(
        idempotent,
        lambda: service.register(body),
        scope=anonymous_scope(body, get_config().auth.secret_key),
        status_code=201
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    idempotent: Optional[IdempotentRequest] = Depends(get_idempotent_request),
    signer: TokenSigner = Depends(get_token_signer),
    db: Session = Depends(get_db)
):
    """Exchange email and password for a bearer token."""
    service = AuthService(db, signer)
    return IdempotencyService(db).run(
        idempotent,
        lambda: service.login(body),
        scope=anonymous_scope(body, get_config().auth.secret_key)
    )


@router.get("/me", response_model=MeResponse)
def me(
    current_user: TokenClaims = Depends(get_current_user),
    signer: TokenSigner = Depends(get_token_signer),
    db: Session = Depends(get_db)
):
    return AuthService(db, signer).me(current_user)
