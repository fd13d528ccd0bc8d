from datetime import date
from decimal import Decimal

import pytest

from services.reservation.domain import (
    ReservationCriteria,
    ReservationId,
    RoomSchedule,
    StayPeriod,
)
from services.reservation.infrastructure.dynamodb_reservation_repository import (
    DynamoDBReservationRepository,
)
from services.room.domain import RoomId
from services.shared.domain import (
    Amount,
    OptimisticLockException,
    PageRequest,
    ResourceNotFoundException,
)


@pytest.fixture
def repository(mock_store):
    return DynamoDBReservationRepository(mock_store)


def _schedule(room_id: str = "room-101", version: int = 3) -> RoomSchedule:
    return RoomSchedule(
        id=RoomId(value=room_id), nightly_rate=Amount(Decimal("100")), version=version
    )


class TestDynamoDBReservationRepository:
    def test_find_schedule_reads_room_before_stays(self, repository, mock_store):
        calls = []
        mock_store.get.side_effect = lambda pk, sk="METADATA": (
            calls.append("room") or {"room_id": "room-101", "price": 100, "version": 9}
        )
        mock_store.query_partition.side_effect = lambda pk, prefix: (
            calls.append("stays")
            or [
                {
                    "reservation_id": "r1",
                    "check_in_date": "2024-01-01",
                    "check_out_date": "2024-01-05",
                }
            ]
        )

        schedule = repository.find_schedule(RoomId(value="room-101"))

        assert calls == ["room", "stays"]
        assert schedule.version == 9
        assert schedule.nightly_rate == Amount(Decimal("100"))
        assert schedule.stays == {
            ReservationId(value="r1"): StayPeriod.from_iso("2024-01-01", "2024-01-05")
        }
        mock_store.query_partition.assert_called_once_with("ROOM#room-101", "STAY#")

    def test_find_schedule_missing_room(self, repository, mock_store):
        mock_store.get.return_value = None

        assert repository.find_schedule(RoomId(value="missing")) is None
        mock_store.query_partition.assert_not_called()

    def test_add_writes_one_transaction(
        self, repository, mock_store, create_reservation
    ):
        tx = mock_store.transaction.return_value
        reservation = create_reservation()

        repository.add(reservation, _schedule(version=3))

        room_update = tx.update.call_args
        assert room_update.args == (
            {"PK": "ROOM#room-101", "SK": "METADATA"},
            "SET #version = #version + :one",
        )
        assert room_update.kwargs["values"] == {":expected": 3, ":one": 1}
        assert isinstance(
            room_update.kwargs["on_failure"](), OptimisticLockException
        )

        user_check = tx.condition_check.call_args
        assert user_check.args[0] == {"PK": "USER#user-1", "SK": "METADATA"}
        assert isinstance(user_check.kwargs["on_failure"](), ResourceNotFoundException)

        reservation_item = tx.put.call_args_list[0].args[0]
        stay_item = tx.put.call_args_list[1].args[0]
        assert reservation_item["PK"] == "RESERVATION#reservation-1"
        assert reservation_item["check_in_date"] == "2024-01-01"
        assert reservation_item["total_amount"] == Decimal("400")
        assert reservation_item["GSI1SK"] == "2024-01-01#reservation-1"
        assert stay_item["PK"] == "ROOM#room-101"
        assert stay_item["SK"] == "STAY#reservation-1"
        tx.commit.assert_called_once()

    def test_update_moving_rooms_locks_both_rooms(
        self, repository, mock_store, create_reservation
    ):
        tx = mock_store.transaction.return_value
        reservation = create_reservation(room_id="room-102")

        repository.update(
            reservation,
            _schedule("room-102", version=1),
            released_from=_schedule("room-101", version=5),
        )

        locked = [call.args[0]["PK"] for call in tx.update.call_args_list]
        assert locked == ["ROOM#room-102", "ROOM#room-101"]
        tx.delete.assert_called_once_with(
            {"PK": "ROOM#room-101", "SK": "STAY#reservation-1"}
        )
        tx.condition_check.assert_not_called()
        assert tx.put.call_args_list[0].kwargs["condition"] == "attribute_exists(PK)"

    def test_update_same_room_keeps_stay(
        self, repository, mock_store, create_reservation
    ):
        tx = mock_store.transaction.return_value

        repository.update(create_reservation(), _schedule(), verify_user=True)

        tx.delete.assert_not_called()
        tx.update.assert_called_once()
        tx.condition_check.assert_called_once()

    def test_remove_deletes_reservation_and_stay(
        self, repository, mock_store, create_reservation
    ):
        tx = mock_store.transaction.return_value

        repository.remove(create_reservation(), _schedule())

        deleted = [call.args[0] for call in tx.delete.call_args_list]
        assert deleted == [
            {"PK": "RESERVATION#reservation-1", "SK": "METADATA"},
            {"PK": "ROOM#room-101", "SK": "STAY#reservation-1"},
        ]
        tx.update.assert_called_once()

    def test_find_all_uses_check_in_as_sort_key(self, repository, mock_store):
        mock_store.query_index.return_value = iter(
            {
                "reservation_id": f"r{i}",
                "room_id": "room-101",
                "user_id": "user-1",
                "check_in_date": f"2024-01-0{i}",
                "check_out_date": f"2024-01-0{i + 1}",
                "total_amount": Decimal("100"),
            }
            for i in range(1, 6)
        )

        found = list(
            repository.find_all(
                ReservationCriteria(check_in_from=date(2024, 1, 1)),
                PageRequest(offset=1, limit=2),
            )
        )

        assert [str(r.id) for r in found] == ["r2", "r3"]
        key_condition = mock_store.query_index.call_args.args[0]
        assert key_condition.expression_operator == "AND"
        assert mock_store.query_index.call_args.args[1] is None
