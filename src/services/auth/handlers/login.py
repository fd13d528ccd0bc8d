from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, ConfigDict, Field

from services.auth.applications.login_service import LoginService
from services.auth.infrastructure import JwtTokenService
from services.shared.config import Settings
from services.shared.infrastructure import DynamoDBStore
from services.shared.utils import parse_json_body, register_error_handlers, success
from services.user.infrastructure.bcrypt_password_hasher import BcryptPasswordHasher
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)

logger = Logger()
app = APIGatewayRestResolver()
register_error_handlers(app, logger)

settings = Settings.from_env()
store = DynamoDBStore(settings=settings)
_service: LoginService | None = None


class LoginRequest(BaseModel):
    """ログインリクエストモデル"""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


def get_service() -> LoginService:
    """署名鍵の取得は最初のリクエストまで遅らせる"""
    global _service
    if _service is None:
        _service = LoginService(
            users=DynamoDBUserRepository(store),
            hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
            tokens=JwtTokenService.from_settings(settings),
        )
    return _service


@app.post("/login")
def login() -> Response:
    request = LoginRequest.model_validate(parse_json_body(app.current_event))
    token = get_service().login(request.username, request.password)
    return success(
        {
            "token": token.access_token,
            "tokenType": token.token_type,
            "expiresIn": token.expires_in,
        }
    )


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """ログイン Lambda ハンドラ"""
    return app.resolve(event, context)
