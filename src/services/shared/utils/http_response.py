import json

from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import (
    APIGatewayRestResolver,
    Response,
    content_types,
)
from pydantic import ValidationError

from services.shared.domain import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DomainException,
    ResourceNotFoundException,
    ValidationException,
)

_STATUS_BY_EXCEPTION: tuple[tuple[type[DomainException], int], ...] = (
    (ValidationException, 400),
    (AuthenticationException, 401),
    (AuthorizationException, 403),
    (ResourceNotFoundException, 404),
    (ConflictException, 409),
)


def api_response(status_code: int, body: dict) -> Response:
    """API Gateway REST API のレスポンスを生成する"""
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
    )


def success(data: object, status_code: int = 200) -> Response:
    return api_response(status_code, {"status": "success", "data": data})


def error(status_code: int, message: str, **extra: object) -> Response:
    return api_response(status_code, {"status": "error", "message": message, **extra})


def status_code_for(exc: DomainException) -> int:
    """ドメイン例外を HTTP ステータスコードに対応付ける"""
    for exc_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def register_error_handlers(app: APIGatewayRestResolver, logger: Logger) -> None:
    """リゾルバに共通の例外ハンドラを登録する

    クライアントには種別ごとのメッセージのみ返し、詳細はサーバー側のログに残す。
    """

    def handle_domain_error(ex: DomainException) -> Response:
        status_code = status_code_for(ex)
        if status_code == 500:
            logger.exception("Unhandled domain error")
            return error(500, "Internal server error")
        logger.warning(
            "Request rejected",
            extra={"error_type": type(ex).__name__, "status_code": status_code},
        )
        if isinstance(ex, AuthenticationException):
            return error(status_code, "Unauthorized")
        if isinstance(ex, AuthorizationException):
            return error(status_code, "Forbidden")
        return error(status_code, str(ex))

    def handle_request_validation_error(ex: ValidationError) -> Response:
        logger.warning("Invalid request", extra={"error_count": ex.error_count()})
        errors = [
            {
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
            }
            for err in ex.errors()
        ]
        return error(400, "Invalid request", errors=errors)

    def handle_unexpected_error(ex: Exception) -> Response:
        logger.exception("Unexpected error while handling request")
        return error(500, "Internal server error")

    app.exception_handler(DomainException)(handle_domain_error)
    app.exception_handler(ValidationError)(handle_request_validation_error)
    app.exception_handler(Exception)(handle_unexpected_error)
