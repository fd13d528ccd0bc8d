from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.auth.domain import Capability
from services.auth.handlers.guard import require
from services.reservation.applications.reservation_service import ReservationService
from services.reservation.domain import ReservationId
from services.reservation.handlers.request_models import (
    CreateReservationRequest,
    ListReservationsQuery,
    UpdateReservationRequest,
)
from services.reservation.handlers.response_models import to_data
from services.reservation.infrastructure.dynamodb_reservation_repository import (
    DynamoDBReservationRepository,
)
from services.shared.infrastructure import DynamoDBStore
from services.shared.utils import parse_json_body, register_error_handlers, success
from services.user.infrastructure.dynamodb_user_repository import (
    DynamoDBUserRepository,
)

logger = Logger()
app = APIGatewayRestResolver()
register_error_handlers(app, logger)

store = DynamoDBStore()
service = ReservationService(
    repository=DynamoDBReservationRepository(store),
    users=DynamoDBUserRepository(store),
)


@app.post("/createReservations")
def create_reservation() -> Response:
    require(app.current_event, Capability.ADMIN)
    request = CreateReservationRequest.model_validate(
        parse_json_body(app.current_event)
    )
    reservation = service.create(request.to_details())
    return success(to_data(reservation), status_code=201)


@app.get("/getReservationsById/<reservation_id>")
def get_reservation(reservation_id: str) -> Response:
    require(app.current_event, Capability.USER)
    reservation = service.get_by_id(ReservationId(value=reservation_id))
    return success(to_data(reservation))


@app.put("/updateReservations/<reservation_id>")
def update_reservation(reservation_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    request = UpdateReservationRequest.model_validate(
        parse_json_body(app.current_event)
    )
    reservation = service.update(
        ReservationId(value=reservation_id), request.to_patch()
    )
    return success(to_data(reservation))


@app.delete("/cancelReservations/<reservation_id>")
def cancel_reservation(reservation_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    reservation = service.delete(ReservationId(value=reservation_id))
    return success(to_data(reservation))


@app.get("/getAllReservations")
def list_reservations() -> Response:
    require(app.current_event, Capability.USER)
    query = ListReservationsQuery.model_validate(
        app.current_event.query_string_parameters or {}
    )
    reservations = service.list(query.to_criteria(), query.to_page())
    return success([to_data(reservation) for reservation in reservations])


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約 API Lambda ハンドラ"""
    logger.info("Received reservation request", extra={"path": event.get("path")})
    return app.resolve(event, context)
