from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.auth.infrastructure import JwtTokenService
from services.shared.config import Settings
from services.shared.domain import AuthenticationException

logger = Logger()

_token_service: JwtTokenService | None = None


def _get_token_service() -> JwtTokenService:
    global _token_service
    if _token_service is None:
        _token_service = JwtTokenService.from_settings(Settings.from_env())
    return _token_service


def _extract_token(authorization: str) -> str:
    """"Bearer <token>" と素のトークンの両方を受け付ける（資格情報がなければ空文字）"""
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip()
    return authorization.strip()


def _api_resource_arn(method_arn: str) -> str:
    """methodArn から同じステージの全メソッドを表す ARN を組み立てる"""
    arn_parts = method_arn.split(":")
    region = arn_parts[3]
    account_id = arn_parts[4]
    api_gw_arn = arn_parts[5]
    rest_api_id = api_gw_arn.split("/")[0]
    stage = api_gw_arn.split("/")[1]
    return f"arn:aws:execute-api:{region}:{account_id}:{rest_api_id}/{stage}/*/*"


def _policy(
    principal_id: str, effect: str, resource: str, context: dict | None = None
) -> dict:
    policy = {
        "principalId": principal_id,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": effect,
                    "Resource": resource,
                }
            ],
        },
    }
    if context:
        policy["context"] = context
    return policy


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """API Gateway TOKEN Authorizer

    有効なトークンであればクレームを context に載せて Allow を返し、
    不正・期限切れのトークンには Deny を返す（API Gateway が 403 を応答する）。
    トークンが空の場合は Unauthorized を送出する（401）。
    """
    token = _extract_token(event.get("authorizationToken") or "")
    if not token:
        logger.warning("Token missing from Authorization header")
        # API Gateway はこの例外メッセージを 401 として応答する
        raise Exception("Unauthorized")
    resource = _api_resource_arn(event["methodArn"])
    try:
        identity = _get_token_service().verify(token)
    except AuthenticationException as e:
        logger.warning("Token rejected", extra={"reason": str(e)})
        return _policy("anonymous", "Deny", resource)

    return _policy(
        identity.user_id,
        "Allow",
        resource,
        {"id": identity.user_id, "username": identity.username, "role": identity.role},
    )
