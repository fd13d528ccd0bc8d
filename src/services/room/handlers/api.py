from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.auth.domain import Capability
from services.auth.handlers.guard import require
from services.hotel.infrastructure.dynamodb_hotel_repository import (
    DynamoDBHotelRepository,
)
from services.room.applications.room_service import RoomService
from services.room.domain import RoomId
from services.room.handlers.request_models import (
    CreateRoomRequest,
    ListRoomsQuery,
    UpdateRoomRequest,
)
from services.room.handlers.response_models import to_data
from services.room.infrastructure.dynamodb_room_repository import (
    DynamoDBRoomRepository,
)
from services.shared.infrastructure import DynamoDBStore
from services.shared.utils import parse_json_body, register_error_handlers, success

logger = Logger()
app = APIGatewayRestResolver()
register_error_handlers(app, logger)

store = DynamoDBStore()
service = RoomService(
    repository=DynamoDBRoomRepository(store),
    hotels=DynamoDBHotelRepository(store),
)


@app.post("/createRooms")
def create_room() -> Response:
    require(app.current_event, Capability.ADMIN)
    request = CreateRoomRequest.model_validate(parse_json_body(app.current_event))
    room = service.create(request.to_details())
    return success(to_data(room), status_code=201)


@app.get("/getRoomsById/<room_id>")
def get_room(room_id: str) -> Response:
    require(app.current_event, Capability.USER)
    return success(to_data(service.get_by_id(RoomId(value=room_id))))


@app.put("/updateRooms/<room_id>")
def update_room(room_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    request = UpdateRoomRequest.model_validate(parse_json_body(app.current_event))
    room = service.update(RoomId(value=room_id), request.to_patch())
    return success(to_data(room))


@app.delete("/deleteRooms/<room_id>")
def delete_room(room_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    return success(to_data(service.delete(RoomId(value=room_id))))


@app.get("/getAllRooms")
def list_rooms() -> Response:
    require(app.current_event, Capability.USER)
    query = ListRoomsQuery.model_validate(
        app.current_event.query_string_parameters or {}
    )
    rooms = service.list(query.to_criteria(), query.to_page())
    return success([to_data(room) for room in rooms])


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """部屋 API Lambda ハンドラ"""
    logger.info("Received room request", extra={"path": event.get("path")})
    return app.resolve(event, context)
