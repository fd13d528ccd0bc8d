import json
from unittest.mock import MagicMock

import pytest

from services.room.handlers import api

ADMIN = {"id": "admin-1", "username": "admin", "role": "admin"}
USER = {"id": "user-1", "username": "alice", "role": "user"}


@pytest.fixture
def mock_service(monkeypatch):
    service = MagicMock()
    monkeypatch.setattr(api, "service", service)
    return service


class TestRoomApi:
    def test_create_room_converts_body(
        self, mock_service, api_event, lambda_context, create_room
    ):
        mock_service.create.return_value = create_room()

        response = api.lambda_handler(
            api_event(
                "POST",
                "/createRooms",
                body={
                    "number": 101,
                    "type": "double",
                    "capacity": 2,
                    "price": 120.5,
                    "HotelId": "hotel-1",
                },
                claims=ADMIN,
            ),
            lambda_context,
        )

        assert response["statusCode"] == 201
        details = mock_service.create.call_args.args[0]
        assert details["room_type"] == "double"
        assert str(details["price"]) == "120.5"
        assert details["hotel_id"] == "hotel-1"
        data = json.loads(response["body"])["data"]
        assert data["type"] == "double"
        assert data["HotelId"] == "hotel-1"

    def test_create_room_rejects_negative_price(
        self, mock_service, api_event, lambda_context
    ):
        response = api.lambda_handler(
            api_event(
                "POST",
                "/createRooms",
                body={"number": 101, "type": "double", "capacity": 2, "price": -1},
                claims=ADMIN,
            ),
            lambda_context,
        )

        assert response["statusCode"] == 400
        mock_service.create.assert_not_called()

    def test_list_rooms_parses_filters(
        self, mock_service, api_event, lambda_context
    ):
        mock_service.list.return_value = iter([])

        response = api.lambda_handler(
            api_event(
                "GET",
                "/getAllRooms",
                query={"type": "suite", "minPrice": "100", "HotelId": "hotel-1"},
                claims=USER,
            ),
            lambda_context,
        )

        assert response["statusCode"] == 200
        criteria, _ = mock_service.list.call_args.args
        assert criteria.room_type == "suite"
        assert str(criteria.min_price) == "100"
        assert str(criteria.hotel_id) == "hotel-1"

    def test_delete_room_requires_admin(self, mock_service, api_event, lambda_context):
        response = api.lambda_handler(
            api_event("DELETE", "/deleteRooms/room-1", claims=USER), lambda_context
        )

        assert response["statusCode"] == 403
