import pytest

from authorizer import handler
from services.auth.domain import Identity
from services.auth.infrastructure import JwtTokenService

METHOD_ARN = (
    "arn:aws:execute-api:ap-northeast-1:123456789012:abc123/prod/GET/getAllHotels"
)


@pytest.fixture
def token_service(monkeypatch):
    service = JwtTokenService(secret="authorizer-secret")
    monkeypatch.setattr(handler, "_token_service", service)
    return service


@pytest.fixture
def token(token_service):
    identity = Identity(user_id="user-1", username="alice", role="admin")
    return token_service.issue(identity).access_token


def _event(authorization: str) -> dict:
    return {
        "type": "TOKEN",
        "authorizationToken": authorization,
        "methodArn": METHOD_ARN,
    }


class TestTokenAuthorizer:
    def test_valid_bearer_token_is_allowed(self, token, lambda_context):
        policy = handler.lambda_handler(_event(f"Bearer {token}"), lambda_context)

        statement = policy["policyDocument"]["Statement"][0]
        assert statement["Effect"] == "Allow"
        assert statement["Resource"] == (
            "arn:aws:execute-api:ap-northeast-1:123456789012:abc123/prod/*/*"
        )
        assert policy["principalId"] == "user-1"
        assert policy["context"] == {
            "id": "user-1",
            "username": "alice",
            "role": "admin",
        }

    def test_bare_token_is_accepted(self, token, lambda_context):
        policy = handler.lambda_handler(_event(token), lambda_context)

        assert policy["policyDocument"]["Statement"][0]["Effect"] == "Allow"

    def test_invalid_token_is_denied(self, token_service, lambda_context):
        policy = handler.lambda_handler(_event("Bearer garbage"), lambda_context)

        assert policy["policyDocument"]["Statement"][0]["Effect"] == "Deny"
        assert "context" not in policy

    def test_token_signed_with_other_key_is_denied(self, token_service, lambda_context):
        other = JwtTokenService(secret="someone-else").issue(
            Identity(user_id="x", username="x", role="admin")
        )

        policy = handler.lambda_handler(
            _event(f"Bearer {other.access_token}"), lambda_context
        )

        assert policy["policyDocument"]["Statement"][0]["Effect"] == "Deny"

    @pytest.mark.parametrize("authorization", ["Bearer ", "Bearer", "bearer   ", ""])
    def test_empty_credentials_are_unauthorized(
        self, token_service, lambda_context, authorization
    ):
        """資格情報のない Authorization ヘッダーは 401 として扱う"""
        with pytest.raises(Exception, match="^Unauthorized$"):
            handler.lambda_handler(_event(authorization), lambda_context)
