import json
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.reservation.handlers import api
from services.shared.domain import OverlappingReservationException

ADMIN = {"id": "admin-1", "username": "admin", "role": "admin"}
USER = {"id": "user-1", "username": "alice", "role": "user"}


@pytest.fixture
def mock_service(monkeypatch):
    service = MagicMock()
    monkeypatch.setattr(api, "service", service)
    return service


def _create_body(**overrides) -> dict:
    body = {
        "checkInDate": "2024-01-01",
        "checkOutDate": "2024-01-05",
        "totalAmount": 400,
        "RoomId": "room-101",
        "UserId": "user-1",
    }
    body.update(overrides)
    return body


class TestReservationApi:
    def test_create_reservation(
        self, mock_service, api_event, lambda_context, create_reservation
    ):
        mock_service.create.return_value = create_reservation()

        response = api.lambda_handler(
            api_event("POST", "/createReservations", body=_create_body(), claims=ADMIN),
            lambda_context,
        )

        assert response["statusCode"] == 201
        details = mock_service.create.call_args.args[0]
        assert details["check_in_date"] == date(2024, 1, 1)
        assert details["total_amount"] == Decimal("400")
        data = json.loads(response["body"])["data"]
        assert data["checkInDate"] == "2024-01-01"
        assert data["RoomId"] == "room-101"

    def test_overlap_is_409(self, mock_service, api_event, lambda_context):
        mock_service.create.side_effect = OverlappingReservationException("overlap")

        response = api.lambda_handler(
            api_event("POST", "/createReservations", body=_create_body(), claims=ADMIN),
            lambda_context,
        )

        assert response["statusCode"] == 409

    def test_create_requires_admin(self, mock_service, api_event, lambda_context):
        response = api.lambda_handler(
            api_event("POST", "/createReservations", body=_create_body(), claims=USER),
            lambda_context,
        )

        assert response["statusCode"] == 403

    def test_malformed_date_is_400(self, mock_service, api_event, lambda_context):
        response = api.lambda_handler(
            api_event(
                "POST",
                "/createReservations",
                body=_create_body(checkInDate="01/01/2024"),
                claims=ADMIN,
            ),
            lambda_context,
        )

        assert response["statusCode"] == 400
        mock_service.create.assert_not_called()

    def test_update_sends_partial_patch(
        self, mock_service, api_event, lambda_context, create_reservation
    ):
        mock_service.update.return_value = create_reservation()

        api.lambda_handler(
            api_event(
                "PUT",
                "/updateReservations/reservation-1",
                body={"checkOutDate": "2024-01-07"},
                claims=ADMIN,
            ),
            lambda_context,
        )

        assert mock_service.update.call_args.args[1] == {
            "check_out_date": date(2024, 1, 7)
        }

    def test_cancel_reservation(
        self, mock_service, api_event, lambda_context, create_reservation
    ):
        mock_service.delete.return_value = create_reservation()

        response = api.lambda_handler(
            api_event("DELETE", "/cancelReservations/reservation-1", claims=ADMIN),
            lambda_context,
        )

        assert response["statusCode"] == 200
        assert str(mock_service.delete.call_args.args[0]) == "reservation-1"

    def test_list_parses_filters(self, mock_service, api_event, lambda_context):
        mock_service.list.return_value = iter([])

        response = api.lambda_handler(
            api_event(
                "GET",
                "/getAllReservations",
                query={
                    "checkInFrom": "2024-01-01",
                    "maxAmount": "500",
                    "UserId": "user-1",
                    "limit": "10",
                },
                claims=USER,
            ),
            lambda_context,
        )

        assert response["statusCode"] == 200
        criteria, page = mock_service.list.call_args.args
        assert criteria.check_in_from == date(2024, 1, 1)
        assert criteria.max_amount == Decimal("500")
        assert str(criteria.user_id) == "user-1"
        assert page.limit == 10
