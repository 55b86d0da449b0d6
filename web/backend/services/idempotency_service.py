#!/usr/bin/env python3
"""
Idempotency service - replay stored responses for repeated POSTs.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from database.repositories import IdempotencyRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdempotentRequest:
    """An Idempotency-Key header together with the endpoint it was sent to."""
    key: str
    endpoint: str


def user_scope(user: TokenClaims) -> str:
    return f"user:{user.user_id}"


def anonymous_scope(body: BaseModel, secret_key: str) -> str:
    """
    Scope for unauthenticated requests: a keyed digest of the request body.

    Only a byte-identical body (credentials included) can replay a stored
    response.
    """
    digest = hmac.new(secret_key.encode('utf-8'), body.model_dump_json().encode('utf-8'), hashlib.sha256)
    return f"anon:{digest.hexdigest()}"


class IdempotencyService:
    """
    Wraps a handler so that a repeated Idempotency-Key returns the first
    successful response verbatim instead of running the handler again.

    Stored responses are looked up by (key, endpoint, scope), so one caller's
    key never replays another caller's response or another endpoint's.
    """

    def __init__(self, db: Session):
        self.repo = IdempotencyRepository(db)

    def run(
        self,
        request: Optional[IdempotentRequest],
        handler: Callable[[], Any],
        scope: str,
        status_code: int = 200
    ) -> JSONResponse:
        """
        Replay or execute.

        Args:
            request: Idempotency-Key and endpoint, or None to always execute.
            handler: Produces the response body. Must commit its own work.
            scope: Caller identity the key is bound to (see user_scope and
                anonymous_scope).
            status_code: Status returned (and stored) on success.

        Errors raised by the handler propagate and nothing is stored.
        """
        if request is not None:
            stored = self.repo.get_response(request.key, request.endpoint, scope)
            if stored is not None:
                stored_status, body = stored
                logger.info(f"Replaying stored response for {request.endpoint} idempotency key {request.key[:16]}")
                return JSONResponse(status_code=stored_status, content=body)

        body = jsonable_encoder(handler())

        if request is not None and status_code < 400:
            try:
                self.repo.save_response(request.key, request.endpoint, scope, status_code, body)
            except SQLAlchemyError as e:
                self.repo.rollback()
                logger.error(f"Failed to store response for idempotency key {request.key[:16]}: {e}", exc_info=True)

        return JSONResponse(status_code=status_code, content=body)
