#!/usr/bin/env python3
"""
Unit tests for role-based PII redaction.
"""

import unittest

from core.relevance.models import Role
from core.relevance.redaction import (
    EMAIL_PATTERN,
    PHONE_PATTERN,
    can_view_pii,
    redact_for_role,
    redact_pii,
)

CONTACT = "Contact me at jane@example.com or 555-123-4567"


class TestRedactForRole(unittest.TestCase):

    def test_user_sees_placeholders(self):
        self.assertEqual(
            redact_for_role(CONTACT, "user"),
            "Contact me at [EMAIL REDACTED] or [PHONE REDACTED]"
        )

    def test_privileged_roles_see_original(self):
        self.assertEqual(redact_for_role(CONTACT, "recruiter"), CONTACT)
        self.assertEqual(redact_for_role(CONTACT, Role.ADMIN), CONTACT)

    def test_unknown_or_missing_role_is_redacted(self):
        self.assertNotIn("jane@example.com", redact_for_role(CONTACT, "guest"))
        self.assertNotIn("jane@example.com", redact_for_role(CONTACT, None))

    def test_can_view_pii(self):
        self.assertTrue(can_view_pii("recruiter"))
        self.assertTrue(can_view_pii("admin"))
        self.assertFalse(can_view_pii("user"))
        self.assertFalse(can_view_pii("superuser"))


class TestRedactPii(unittest.TestCase):

    def test_phone_separators(self):
        text = "Call 555.123.4567, 5551234567 or 555-1234567"
        self.assertEqual(
            redact_pii(text),
            "Call [PHONE REDACTED], [PHONE REDACTED] or [PHONE REDACTED]"
        )

    def test_no_pattern_survives(self):
        text = "a.b+c@mail.co.uk, x_y@host.io; 212-555-0199 and 3105550000"
        redacted = redact_pii(text)
        self.assertIsNone(EMAIL_PATTERN.search(redacted))
        self.assertIsNone(PHONE_PATTERN.search(redacted))

    def test_text_without_pii_unchanged(self):
        self.assertEqual(redact_pii("Python developer, 10 years"), "Python developer, 10 years")

    def test_empty(self):
        self.assertEqual(redact_pii(""), "")


if __name__ == '__main__':
    unittest.main()
