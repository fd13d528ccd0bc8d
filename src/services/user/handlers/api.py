from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.auth.domain import Capability
from services.auth.handlers.guard import require
from services.shared.config import Settings
from services.shared.infrastructure import DynamoDBStore
from services.shared.utils import parse_json_body, register_error_handlers, success
from services.user.applications.user_service import UserService
from services.user.domain import UserId
from services.user.handlers.request_models import (
    CreateUserRequest,
    ListUsersQuery,
    UpdateUserRequest,
)
from services.user.handlers.response_models import to_data
from services.user.infrastructure.bcrypt_password_hasher import BcryptPasswordHasher
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)

logger = Logger()
app = APIGatewayRestResolver()
register_error_handlers(app, logger)

settings = Settings.from_env()
store = DynamoDBStore(settings=settings)
service = UserService(
    repository=DynamoDBUserRepository(store),
    hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
)


@app.post("/createUsers")
def create_user() -> Response:
    request = CreateUserRequest.model_validate(parse_json_body(app.current_event))
    user = service.create(request.to_details())
    return success(to_data(user), status_code=201)


@app.get("/getUsersById/<user_id>")
def get_user(user_id: str) -> Response:
    require(app.current_event, Capability.USER)
    return success(to_data(service.get_by_id(UserId(value=user_id))))


@app.put("/updateUsers/<user_id>")
def update_user(user_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    request = UpdateUserRequest.model_validate(parse_json_body(app.current_event))
    user = service.update(UserId(value=user_id), request.to_changes())
    return success(to_data(user))


@app.delete("/deleteUsers/<user_id>")
def delete_user(user_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    return success(to_data(service.delete(UserId(value=user_id))))


@app.get("/getAllUsers")
def list_users() -> Response:
    require(app.current_event, Capability.USER)
    query = ListUsersQuery.model_validate(
        app.current_event.query_string_parameters or {}
    )
    users = service.list(query.to_criteria(), query.to_page())
    return success([to_data(user) for user in users])


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """利用者 API Lambda ハンドラ"""
    logger.info("Received user request", extra={"path": event.get("path")})
    return app.resolve(event, context)
