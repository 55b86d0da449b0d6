#!/usr/bin/env python3
"""
PII Redactor - Mask e-mail addresses and phone numbers for display.

Redaction is a read-time transformation. Stored resume content is never
modified.
"""

import re
from typing import Union

from core.relevance.models import Role

EMAIL_PLACEHOLDER = '[EMAIL REDACTED]'
PHONE_PLACEHOLDER = '[PHONE REDACTED]'

EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
PHONE_PATTERN = re.compile(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b')

PRIVILEGED_ROLES = frozenset({Role.RECRUITER, Role.ADMIN})


def can_view_pii(role: Union[Role, str, None]) -> bool:
    """Recruiters and admins see unredacted content."""
    if role is None:
        return False
    try:
        return Role(role) in PRIVILEGED_ROLES
    except ValueError:
        return False


def redact_pii(text: str) -> str:
    """Replace e-mail addresses and phone numbers with fixed placeholders."""
    if not text:
        return text
    text = EMAIL_PATTERN.sub(EMAIL_PLACEHOLDER, text)
    return PHONE_PATTERN.sub(PHONE_PLACEHOLDER, text)


def redact_for_role(text: str, role: Union[Role, str, None]) -> str:
    """Return text unchanged for privileged roles, redacted otherwise."""
    if can_view_pii(role):
        return text
    return redact_pii(text)
