from aws_lambda_powertools.utilities.data_classes.common import BaseProxyEvent

from services.auth.domain import Capability, Identity, authorize


def current_identity(event: BaseProxyEvent) -> Identity | None:
    """Lambda Authorizer が requestContext に載せたクレームから利用者を復元する"""
    request_context = event.get("requestContext") or {}
    claims = request_context.get("authorizer") or {}
    if not claims.get("id"):
        return None
    return Identity(
        user_id=str(claims["id"]),
        username=str(claims.get("username", "")),
        role=str(claims.get("role", "")),
    )


def require(event: BaseProxyEvent, capability: Capability) -> Identity:
    """capability を満たさない場合は例外を送出する"""
    identity = current_identity(event)
    authorize(identity, capability)
    return identity
