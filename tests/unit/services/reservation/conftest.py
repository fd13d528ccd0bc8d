import threading
from collections.abc import Iterator
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.reservation.domain import (
    Reservation,
    ReservationCriteria,
    ReservationId,
    ReservationRepository,
    RoomSchedule,
    StayPeriod,
)
from services.room.domain import RoomId
from services.shared.domain import (
    Amount,
    OptimisticLockException,
    PageRequest,
    ResourceNotFoundException,
)
from services.user.domain import UserId


class InMemoryReservationRepository(ReservationRepository):
    """DynamoDB のトランザクションと同じ条件判定を行うインメモリ実装

    barrier を渡すと最初の find_schedule の読み取り後に待ち合わせ、
    複数スレッドが同じ version を読んだ状態でコミットを競わせられる。
    待ち合わせは1度だけで、競合後の読み直しは待たない。
    """

    def __init__(self, barrier: threading.Barrier | None = None) -> None:
        self._lock = threading.Lock()
        self._barrier = barrier
        self.rooms: dict[RoomId, dict] = {}
        self.stays: dict[RoomId, dict[ReservationId, StayPeriod]] = {}
        self.records: dict[ReservationId, dict] = {}
        self.user_ids: set[UserId] = set()

    def add_room(self, room_id: str, price: Decimal = Decimal("100")) -> RoomId:
        key = RoomId(value=room_id)
        self.rooms[key] = {"price": Amount(price), "version": 0}
        self.stays[key] = {}
        return key

    def add_user(self, user_id: str) -> UserId:
        key = UserId(value=user_id)
        self.user_ids.add(key)
        return key

    def find_by_id(self, reservation_id: ReservationId) -> Reservation | None:
        with self._lock:
            record = self.records.get(reservation_id)
        return self._to_entity(record) if record else None

    def find_schedule(self, room_id: RoomId) -> RoomSchedule | None:
        with self._lock:
            room = self.rooms.get(room_id)
            if room is None:
                return None
            schedule = RoomSchedule(
                id=room_id,
                nightly_rate=room["price"],
                stays=dict(self.stays[room_id]),
                version=room["version"],
            )
        barrier = self._barrier
        if barrier is not None:
            barrier.wait(timeout=5)
            self._barrier = None
        return schedule

    def add(self, reservation: Reservation, schedule: RoomSchedule) -> None:
        with self._lock:
            self._check_version(schedule)
            self._check_user(reservation.user_id)
            self._bump(schedule)
            self.records[reservation.id] = self._to_record(reservation)
            self.stays[reservation.room_id][reservation.id] = reservation.stay_period

    def update(
        self,
        reservation: Reservation,
        schedule: RoomSchedule,
        released_from: RoomSchedule | None = None,
        verify_user: bool = False,
    ) -> None:
        with self._lock:
            self._check_version(schedule)
            if released_from is not None:
                self._check_version(released_from)
            if verify_user:
                self._check_user(reservation.user_id)
            if reservation.id not in self.records:
                raise ResourceNotFoundException(
                    f"Reservation not found: {reservation.id}"
                )
            self._bump(schedule)
            if released_from is not None:
                self._bump(released_from)
                self.stays[released_from.id].pop(reservation.id, None)
            self.records[reservation.id] = self._to_record(reservation)
            self.stays[reservation.room_id][reservation.id] = reservation.stay_period

    def remove(self, reservation: Reservation, schedule: RoomSchedule | None) -> None:
        with self._lock:
            if reservation.id not in self.records:
                raise ResourceNotFoundException(
                    f"Reservation not found: {reservation.id}"
                )
            if schedule is not None:
                self._check_version(schedule)
                self._bump(schedule)
            del self.records[reservation.id]
            self.stays.get(reservation.room_id, {}).pop(reservation.id, None)

    def find_all(
        self, criteria: ReservationCriteria, page: PageRequest
    ) -> Iterator[Reservation]:
        with self._lock:
            records = sorted(
                self.records.values(),
                key=lambda record: (record["check_in"], record["id"]),
            )
        reservations = (self._to_entity(record) for record in records)
        return page.slice(r for r in reservations if self._matches(r, criteria))

    def _check_version(self, schedule: RoomSchedule) -> None:
        room = self.rooms.get(schedule.id)
        if room is None or room["version"] != schedule.version:
            raise OptimisticLockException(f"Room {schedule.id} was booked concurrently")

    def _check_user(self, user_id: UserId) -> None:
        if user_id not in self.user_ids:
            raise ResourceNotFoundException(f"User not found: {user_id}")

    def _bump(self, schedule: RoomSchedule) -> None:
        self.rooms[schedule.id]["version"] += 1

    @staticmethod
    def _matches(reservation: Reservation, criteria: ReservationCriteria) -> bool:
        period = reservation.stay_period
        amount = reservation.total_amount.value
        return all(
            [
                criteria.check_in_from is None
                or period.check_in >= criteria.check_in_from,
                criteria.check_out_to is None
                or period.check_out <= criteria.check_out_to,
                criteria.min_amount is None or amount >= criteria.min_amount,
                criteria.max_amount is None or amount <= criteria.max_amount,
                criteria.room_id is None or reservation.room_id == criteria.room_id,
                criteria.user_id is None or reservation.user_id == criteria.user_id,
            ]
        )

    @staticmethod
    def _to_record(reservation: Reservation) -> dict:
        return {
            "id": str(reservation.id),
            "room_id": str(reservation.room_id),
            "user_id": str(reservation.user_id),
            "check_in": reservation.stay_period.check_in,
            "check_out": reservation.stay_period.check_out,
            "total_amount": reservation.total_amount.value,
        }

    @staticmethod
    def _to_entity(record: dict) -> Reservation:
        return Reservation(
            id=ReservationId(value=record["id"]),
            room_id=RoomId(value=record["room_id"]),
            user_id=UserId(value=record["user_id"]),
            stay_period=StayPeriod(
                check_in=record["check_in"], check_out=record["check_out"]
            ),
            total_amount=Amount(record["total_amount"]),
        )


@pytest.fixture
def repository():
    repository = InMemoryReservationRepository()
    repository.add_room("room-101", Decimal("100"))
    repository.add_room("room-102", Decimal("150"))
    repository.add_user("user-1")
    return repository


@pytest.fixture
def users_for():
    """指定した repository に登録された利用者だけを返す UserRepository のモックを作る"""

    def _factory(repository: InMemoryReservationRepository) -> MagicMock:
        mock = MagicMock()
        mock.find_by_id.side_effect = lambda user_id: (
            MagicMock(id=user_id) if user_id in repository.user_ids else None
        )
        return mock

    return _factory


@pytest.fixture
def users(repository, users_for):
    return users_for(repository)


@pytest.fixture
def racing_repository():
    """2 スレッドが同じ version を読んでからコミットを競う repository"""
    repository = InMemoryReservationRepository(barrier=threading.Barrier(2))
    repository.add_room("room-101", Decimal("100"))
    repository.add_user("user-1")
    return repository


@pytest.fixture
def reservation_details():
    """予約登録の入力を生成する Factory fixture"""

    def _factory(
        check_in: str = "2024-01-01",
        check_out: str = "2024-01-05",
        total_amount: Decimal = Decimal("400"),
        room_id: str = "room-101",
        user_id: str = "user-1",
    ) -> dict:
        return {
            "check_in_date": date.fromisoformat(check_in),
            "check_out_date": date.fromisoformat(check_out),
            "total_amount": total_amount,
            "room_id": room_id,
            "user_id": user_id,
        }

    return _factory


@pytest.fixture
def create_reservation():
    """Reservation を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        reservation_id: str = "reservation-1",
        check_in: str = "2024-01-01",
        check_out: str = "2024-01-05",
        total_amount: Decimal = Decimal("400"),
        room_id: str = "room-101",
        user_id: str = "user-1",
    ) -> Reservation:
        return Reservation(
            id=ReservationId(value=reservation_id),
            room_id=RoomId(value=room_id),
            user_id=UserId(value=user_id),
            stay_period=StayPeriod.from_iso(check_in, check_out),
            total_amount=Amount(total_amount),
        )

    return _factory
