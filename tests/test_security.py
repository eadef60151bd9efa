"""Unit tests for the password hasher and the token service."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.core.exceptions import InvalidToken
from app.core.security import PasswordHasher, TokenService

from conftest import TEST_SECRET


def _flip_char(token: str, index: int) -> str:
    replacement = "A" if token[index] != "A" else "B"
    return token[:index] + replacement + token[index + 1:]


class TestPasswordHasher:
    """Tests for bcrypt hashing through passlib."""

    def test_hash_verifies_against_plaintext(self, hasher):
        hashed = hasher.hash("pass123")
        assert hashed != "pass123"
        assert hasher.verify("pass123", hashed)

    def test_wrong_password_does_not_verify(self, hasher):
        hashed = hasher.hash("pass123")
        assert not hasher.verify("pass124", hashed)

    def test_hashes_are_salted(self, hasher):
        assert hasher.hash("same-password") != hasher.hash("same-password")

    def test_uses_configured_cost(self):
        hashed = PasswordHasher(rounds=5).hash("pass123")
        assert hashed.startswith("$2b$05$")

    def test_malformed_hash_verifies_false(self, hasher):
        assert hasher.verify("pass123", "not-a-bcrypt-hash") is False

    def test_empty_inputs_verify_false(self, hasher):
        hashed = hasher.hash("pass123")
        assert hasher.verify("", hashed) is False
        assert hasher.verify("pass123", "") is False


class TestTokenService:
    """Tests for JWT issuance and verification."""

    def test_issued_token_verifies_with_claims(self, tokens):
        token = tokens.issue(7, "alice")
        claims = tokens.verify(token)
        assert claims.user_id == 7
        assert claims.username == "alice"
        assert claims.expires_at - claims.issued_at == timedelta(minutes=30)

    def test_token_payload_layout(self, tokens):
        token = tokens.issue(7, "alice")
        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["sub"] == "7"
        assert payload["username"] == "alice"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_is_rejected(self, tokens):
        issued = datetime.now(timezone.utc) - timedelta(hours=1)
        token = tokens.issue(7, "alice", issued_at=issued)
        with pytest.raises(InvalidToken) as exc_info:
            tokens.verify(token)
        assert exc_info.value.reason == "token_expired"

    def test_token_near_expiry_still_valid(self, tokens):
        issued = datetime.now(timezone.utc) - timedelta(minutes=29)
        token = tokens.issue(7, "alice", issued_at=issued)
        assert tokens.verify(token).user_id == 7

    def test_tampered_token_is_rejected(self, tokens):
        token = tokens.issue(7, "alice")
        # The final character may only carry base64 padding bits, so it is skipped
        positions = [i for i in range(len(token) - 1) if token[i] != "."]
        for index in positions[::5]:
            with pytest.raises(InvalidToken):
                tokens.verify(_flip_char(token, index))

    def test_token_signed_with_other_key_is_rejected(self, tokens):
        other = TokenService(secret_key="someone-else", expires_delta=timedelta(minutes=30))
        with pytest.raises(InvalidToken) as exc_info:
            tokens.verify(other.issue(7, "alice"))
        assert exc_info.value.reason == "signature_invalid"

    def test_garbage_is_rejected(self, tokens):
        for value in ["", "abc", "a.b.c", "Bearer xyz"]:
            with pytest.raises(InvalidToken):
                tokens.verify(value)

    def test_token_without_username_is_rejected(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "7", "iat": now, "exp": now + timedelta(minutes=5)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_non_numeric_subject_is_rejected(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "alice", "username": "alice", "iat": now, "exp": now + timedelta(minutes=5)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken) as exc_info:
            tokens.verify(token)
        assert exc_info.value.reason == "token_sub_not_int"

    def test_token_without_expiry_is_rejected(self, tokens):
        token = jwt.encode(
            {"sub": "7", "username": "alice", "iat": datetime.now(timezone.utc)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_blank_secret_is_refused(self):
        with pytest.raises(ValueError):
            TokenService(secret_key="")
