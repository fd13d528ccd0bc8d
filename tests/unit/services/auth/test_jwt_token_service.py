from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from services.auth.domain import Identity
from services.auth.infrastructure import JwtTokenService
from services.shared.config import Settings
from services.shared.domain import AuthenticationException

SECRET = "test-signing-secret"


@pytest.fixture
def identity():
    return Identity(user_id="user-1", username="alice", role="user")


class TestJwtTokenService:
    def test_issue_and_verify(self, identity):
        service = JwtTokenService(secret=SECRET)

        token = service.issue(identity)

        assert token.token_type == "Bearer"
        assert token.expires_in == 3600
        assert service.verify(token.access_token) == identity

    def test_token_carries_expected_claims(self, identity):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        service = JwtTokenService(secret=SECRET, ttl_seconds=60, clock=lambda: now)

        token = service.issue(identity)
        claims = jwt.get_unverified_claims(token.access_token)

        assert claims["id"] == "user-1"
        assert claims["username"] == "alice"
        assert claims["role"] == "user"
        assert claims["exp"] - claims["iat"] == 60

    def test_expired_token_is_rejected(self, identity):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        issuer = JwtTokenService(secret=SECRET, clock=lambda: past)
        token = issuer.issue(identity).access_token

        with pytest.raises(AuthenticationException, match="expired"):
            JwtTokenService(secret=SECRET).verify(token)

    def test_forged_token_is_rejected(self, identity):
        token = JwtTokenService(secret="other-secret").issue(identity).access_token

        with pytest.raises(AuthenticationException, match="Invalid token"):
            JwtTokenService(secret=SECRET).verify(token)

    def test_malformed_token_is_rejected(self):
        with pytest.raises(AuthenticationException, match="Invalid token"):
            JwtTokenService(secret=SECRET).verify("not.a.jwt")

    def test_missing_claim_is_rejected(self):
        token = jwt.encode({"id": "user-1"}, SECRET, algorithm="HS256")

        with pytest.raises(AuthenticationException, match="missing claim"):
            JwtTokenService(secret=SECRET).verify(token)

    def test_empty_secret_is_a_configuration_error(self):
        with pytest.raises(ValueError):
            JwtTokenService(secret="")

    def test_from_settings_prefers_local_secret(self, identity, monkeypatch):
        def fail(_arn):
            raise AssertionError("Secrets Manager must not be called")

        monkeypatch.setattr(
            "services.auth.infrastructure.jwt_token_service.get_secret", fail
        )
        settings = Settings.from_env(
            {"TABLE_NAME": "t", "TOKEN_SECRET": SECRET, "TOKEN_SECRET_ARN": "arn"}
        )

        service = JwtTokenService.from_settings(settings)

        assert service.verify(service.issue(identity).access_token) == identity

    def test_from_settings_reads_secrets_manager(self, identity, monkeypatch):
        monkeypatch.setattr(
            "services.auth.infrastructure.jwt_token_service.get_secret",
            lambda arn: SECRET,
        )
        settings = Settings.from_env({"TABLE_NAME": "t", "TOKEN_SECRET_ARN": "arn"})

        service = JwtTokenService.from_settings(settings)
        token = service.issue(identity).access_token

        assert JwtTokenService(secret=SECRET).verify(token) == identity
