from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import jwt
import pytest
from pydantic import ValidationError as PydanticValidationError

from vidtube.config import TokenConfig
from vidtube.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
    UnauthorizedError,
)
from vidtube.core.security import PasswordHasher, TokenService, TokenType

ACCESS_SECRET = "unit-access-secret"
REFRESH_SECRET = "unit-refresh-secret"


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(
        TokenConfig(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)
    )


@pytest.fixture
def subject():
    return SimpleNamespace(
        id=uuid4(), email="alice@x.com", username="alice", full_name="Alice"
    )


class TestPasswordHasher:
    def test_hash_is_salted_and_verifies(self, hasher):
        first = hasher.hash("P@ssw0rd!")
        second = hasher.hash("P@ssw0rd!")

        assert first != second
        assert "P@ssw0rd!" not in first
        assert hasher.verify("P@ssw0rd!", first)
        assert hasher.verify("P@ssw0rd!", second)

    def test_mismatch_returns_false(self, hasher):
        digest = hasher.hash("correct horse")
        assert hasher.verify("battery staple", digest) is False

    def test_unknown_digest_returns_false(self, hasher):
        assert hasher.verify("anything", "not-a-known-hash") is False


class TestTokenService:
    def test_access_token_round_trip(self, tokens, subject):
        token = tokens.issue_access_token(subject)
        claims = tokens.verify(token, TokenType.ACCESS)

        assert claims.sub == subject.id
        assert claims.type is TokenType.ACCESS
        assert claims.exp - claims.iat == timedelta(minutes=15)

        payload = jwt.decode(token, ACCESS_SECRET, algorithms=["HS256"])
        assert payload["username"] == "alice"
        assert payload["email"] == "alice@x.com"

    def test_refresh_token_lifetime(self, tokens, subject):
        claims = tokens.verify(tokens.issue_refresh_token(subject), TokenType.REFRESH)
        assert claims.exp - claims.iat == timedelta(days=10)

    def test_tokens_issued_together_are_distinct(self, tokens, subject):
        first = tokens.issue_pair(subject)
        second = tokens.issue_pair(subject)

        assert first.refresh_token != second.refresh_token
        assert first.access_token != second.access_token

    def test_refresh_token_rejected_as_access(self, tokens, subject):
        token = tokens.issue_refresh_token(subject)
        with pytest.raises(TokenInvalidError):
            tokens.verify(token, TokenType.ACCESS)

    def test_access_token_rejected_as_refresh(self, tokens, subject):
        token = tokens.issue_access_token(subject)
        with pytest.raises(TokenInvalidError):
            tokens.verify(token, TokenType.REFRESH)

    def test_type_claim_is_checked_even_with_matching_secret(self, tokens, subject):
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {
                "sub": str(subject.id),
                "type": "refresh",
                "iat": now,
                "exp": now + timedelta(minutes=5),
                "jti": "x",
            },
            ACCESS_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            tokens.verify(forged, TokenType.ACCESS)

    def test_expired_token(self, tokens, subject):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        expired = jwt.encode(
            {
                "sub": str(subject.id),
                "type": "access",
                "iat": past,
                "exp": past + timedelta(minutes=15),
                "jti": "x",
            },
            ACCESS_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenExpiredError) as exc_info:
            tokens.verify(expired, TokenType.ACCESS)
        assert isinstance(exc_info.value, UnauthorizedError)
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("garbage", ["not-a-token", "a.b.c", ""])
    def test_malformed_token(self, tokens, garbage):
        with pytest.raises(TokenMalformedError):
            tokens.verify(garbage, TokenType.ACCESS)

    def test_non_uuid_subject_is_malformed(self, tokens):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "not-a-uuid",
                "type": "access",
                "iat": now,
                "exp": now + timedelta(minutes=5),
                "jti": "x",
            },
            ACCESS_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenMalformedError):
            tokens.verify(token, TokenType.ACCESS)


def test_token_config_requires_distinct_secrets():
    with pytest.raises(PydanticValidationError):
        TokenConfig(access_secret="same", refresh_secret="same")
