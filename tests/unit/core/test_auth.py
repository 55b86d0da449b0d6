import time
import unittest

from core.auth import (
    AuthError,
    TokenExpired,
    TokenSigner,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):

    def test_hash_and_verify(self):
        hashed = hash_password("secret123")
        self.assertNotEqual(hashed, "secret123")
        self.assertTrue(verify_password("secret123", hashed))
        self.assertFalse(verify_password("wrong", hashed))

    def test_hashes_are_salted(self):
        self.assertNotEqual(hash_password("same"), hash_password("same"))

    def test_malformed_hash_does_not_verify(self):
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))


class TestTokenSigner(unittest.TestCase):

    def setUp(self):
        self.signer = TokenSigner("test-secret", max_age_seconds=3600)

    def test_issue_and_verify(self):
        token = self.signer.issue(7, "jane@example.com", "recruiter")
        claims = self.signer.verify(token)

        self.assertEqual(claims.user_id, 7)
        self.assertEqual(claims.email, "jane@example.com")
        self.assertEqual(claims.role, "recruiter")

    def test_tampered_token(self):
        token = self.signer.issue(7, "jane@example.com", "user")
        with self.assertRaises(AuthError):
            first = "x" if token[0] != "x" else "y"
            self.signer.verify(first + token[1:])

    def test_other_secret_rejected(self):
        token = TokenSigner("another-secret").issue(1, "a@example.com", "admin")
        with self.assertRaises(AuthError):
            self.signer.verify(token)

    def test_garbage_token(self):
        with self.assertRaises(AuthError):
            self.signer.verify("not.a.token")

    def test_expired_token(self):
        token = self.signer.issue(7, "jane@example.com", "user")
        time.sleep(1.1)
        with self.assertRaises(TokenExpired):
            self.signer.verify(token, max_age_seconds=0)

    def test_expired_is_an_auth_error(self):
        self.assertTrue(issubclass(TokenExpired, AuthError))


if __name__ == '__main__':
    unittest.main()
