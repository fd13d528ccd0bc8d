from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.auth.domain import Capability
from services.auth.handlers.guard import require
from services.hotel.applications.hotel_service import HotelService
from services.hotel.domain import HotelId
from services.hotel.handlers.request_models import (
    CreateHotelRequest,
    ListHotelsQuery,
    UpdateHotelRequest,
)
from services.hotel.handlers.response_models import to_data
from services.hotel.infrastructure.dynamodb_hotel_repository import (
    DynamoDBHotelRepository,
)
from services.shared.infrastructure import DynamoDBStore
from services.shared.utils import parse_json_body, register_error_handlers, success

logger = Logger()
app = APIGatewayRestResolver()
register_error_handlers(app, logger)

store = DynamoDBStore()
service = HotelService(repository=DynamoDBHotelRepository(store))


@app.post("/hotels")
def create_hotel() -> Response:
    require(app.current_event, Capability.ADMIN)
    request = CreateHotelRequest.model_validate(parse_json_body(app.current_event))
    hotel = service.create(
        {
            "name": request.name,
            "address": request.address,
            "city": request.city,
            "state": request.state,
        }
    )
    return success(to_data(hotel), status_code=201)


@app.get("/getHotelsById/<hotel_id>")
def get_hotel(hotel_id: str) -> Response:
    require(app.current_event, Capability.USER)
    return success(to_data(service.get_by_id(HotelId(value=hotel_id))))


@app.put("/updateHotels/<hotel_id>")
def update_hotel(hotel_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    request = UpdateHotelRequest.model_validate(parse_json_body(app.current_event))
    hotel = service.update(HotelId(value=hotel_id), request.to_patch())
    return success(to_data(hotel))


@app.delete("/deleteHotels/<hotel_id>")
def delete_hotel(hotel_id: str) -> Response:
    require(app.current_event, Capability.ADMIN)
    return success(to_data(service.delete(HotelId(value=hotel_id))))


@app.get("/getAllHotels")
def list_hotels() -> Response:
    require(app.current_event, Capability.USER)
    query = ListHotelsQuery.model_validate(
        app.current_event.query_string_parameters or {}
    )
    hotels = service.list(query.to_criteria(), query.to_page())
    return success([to_data(hotel) for hotel in hotels])


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """ホテル API Lambda ハンドラ"""
    logger.info("Received hotel request", extra={"path": event.get("path")})
    return app.resolve(event, context)
