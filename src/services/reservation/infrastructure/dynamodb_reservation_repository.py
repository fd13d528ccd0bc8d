from collections.abc import Iterator
from datetime import date

from boto3.dynamodb.conditions import Attr, Key

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
    DuplicateResourceException,
    OptimisticLockException,
    PageRequest,
    ResourceNotFoundException,
)
from services.shared.infrastructure import METADATA, DynamoDBStore, Transaction, all_of
from services.user.domain import UserId

_STAY_PREFIX = "STAY#"
_VERSION_NAMES = {"#version": "version"}


def _reservation_key(reservation_id: ReservationId) -> dict:
    return {"PK": f"RESERVATION#{reservation_id}", "SK": METADATA}


def _room_key(room_id: RoomId) -> dict:
    return {"PK": f"ROOM#{room_id}", "SK": METADATA}


def _stay_key(room_id: RoomId, reservation_id: ReservationId) -> dict:
    return {"PK": f"ROOM#{room_id}", "SK": f"{_STAY_PREFIX}{reservation_id}"}


class DynamoDBReservationRepository(ReservationRepository):
    """DynamoDBを使用したReservationRepository の具象実装

    部屋の予約一覧は ROOM#{room_id} パーティションの STAY# アイテムで表す。
    予約・滞在・部屋の version は常に同一トランザクションで書き込む。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def find_by_id(self, reservation_id: ReservationId) -> Reservation | None:
        key = _reservation_key(reservation_id)
        item = self._store.get(key["PK"], key["SK"])
        if not item:
            return None
        return self._to_entity(item)

    def find_schedule(self, room_id: RoomId) -> RoomSchedule | None:
        """部屋の version を読んでから滞在一覧を読む（順序を入れ替えない）"""
        room = self._store.get(f"ROOM#{room_id}")
        if not room:
            return None
        stays = self._store.query_partition(f"ROOM#{room_id}", _STAY_PREFIX)
        return RoomSchedule(
            id=room_id,
            nightly_rate=Amount(room["price"]),
            stays={
                ReservationId(value=stay["reservation_id"]): StayPeriod.from_iso(
                    stay["check_in_date"], stay["check_out_date"]
                )
                for stay in stays
            },
            version=int(room.get("version", 0)),
        )

    def add(self, reservation: Reservation, schedule: RoomSchedule) -> None:
        tx = self._store.transaction()
        self._lock_room(tx, schedule)
        self._check_user(tx, reservation.user_id)
        tx.put(
            self._to_item(reservation),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"Reservation already exists: {reservation.id}"
            ),
        )
        tx.put(self._to_stay_item(reservation))
        tx.commit()

    def update(
        self,
        reservation: Reservation,
        schedule: RoomSchedule,
        released_from: RoomSchedule | None = None,
        verify_user: bool = False,
    ) -> None:
        tx = self._store.transaction()
        self._lock_room(tx, schedule)
        if released_from is not None and released_from.id != schedule.id:
            self._lock_room(tx, released_from)
            tx.delete(_stay_key(released_from.id, reservation.id))
        if verify_user:
            self._check_user(tx, reservation.user_id)
        tx.put(
            self._to_item(reservation),
            condition="attribute_exists(PK)",
            on_failure=lambda: ResourceNotFoundException(
                f"Reservation not found: {reservation.id}"
            ),
        )
        tx.put(self._to_stay_item(reservation))
        tx.commit()

    def remove(self, reservation: Reservation, schedule: RoomSchedule | None) -> None:
        tx = self._store.transaction()
        tx.delete(
            _reservation_key(reservation.id),
            condition="attribute_exists(PK)",
            on_failure=lambda: ResourceNotFoundException(
                f"Reservation not found: {reservation.id}"
            ),
        )
        tx.delete(_stay_key(reservation.room_id, reservation.id))
        if schedule is not None:
            self._lock_room(tx, schedule)
        tx.commit()

    def find_all(
        self, criteria: ReservationCriteria, page: PageRequest
    ) -> Iterator[Reservation]:
        """チェックイン日順に条件に一致する予約を返す"""
        key_condition = Key("GSI1PK").eq("RESERVATIONS")
        if criteria.check_in_from is not None:
            key_condition = key_condition & Key("GSI1SK").gte(
                criteria.check_in_from.isoformat()
            )
        items = self._store.query_index(
            key_condition,
            all_of(
                [
                    Attr("check_out_date").lte(criteria.check_out_to.isoformat())
                    if criteria.check_out_to is not None
                    else None,
                    Attr("total_amount").gte(criteria.min_amount)
                    if criteria.min_amount is not None
                    else None,
                    Attr("total_amount").lte(criteria.max_amount)
                    if criteria.max_amount is not None
                    else None,
                    Attr("room_id").eq(str(criteria.room_id))
                    if criteria.room_id is not None
                    else None,
                    Attr("user_id").eq(str(criteria.user_id))
                    if criteria.user_id is not None
                    else None,
                ]
            ),
        )
        return page.slice(self._to_entity(item) for item in items)

    def _lock_room(self, tx: Transaction, schedule: RoomSchedule) -> None:
        """読み取り時の version を条件に部屋の version を進める"""
        tx.update(
            _room_key(schedule.id),
            "SET #version = #version + :one",
            condition="#version = :expected",
            names=_VERSION_NAMES,
            values={":expected": schedule.version, ":one": 1},
            on_failure=lambda: OptimisticLockException(
                f"Room {schedule.id} was booked concurrently, please retry"
            ),
        )

    def _check_user(self, tx: Transaction, user_id: UserId) -> None:
        tx.condition_check(
            {"PK": f"USER#{user_id}", "SK": METADATA},
            condition="attribute_exists(PK)",
            on_failure=lambda: ResourceNotFoundException(f"User not found: {user_id}"),
        )

    def _to_item(self, reservation: Reservation) -> dict:
        check_in = reservation.stay_period.check_in.isoformat()
        return {
            **_reservation_key(reservation.id),
            "entity_type": "RESERVATION",
            "reservation_id": str(reservation.id),
            "room_id": str(reservation.room_id),
            "user_id": str(reservation.user_id),
            "check_in_date": check_in,
            "check_out_date": reservation.stay_period.check_out.isoformat(),
            "total_amount": reservation.total_amount.value,
            "GSI1PK": "RESERVATIONS",
            "GSI1SK": f"{check_in}#{reservation.id}",
        }

    def _to_stay_item(self, reservation: Reservation) -> dict:
        return {
            **_stay_key(reservation.room_id, reservation.id),
            "entity_type": "STAY",
            "reservation_id": str(reservation.id),
            "check_in_date": reservation.stay_period.check_in.isoformat(),
            "check_out_date": reservation.stay_period.check_out.isoformat(),
        }

    def _to_entity(self, item: dict) -> Reservation:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Reservation(
            id=ReservationId(value=item["reservation_id"]),
            room_id=RoomId(value=item["room_id"]),
            user_id=UserId(value=item["user_id"]),
            stay_period=StayPeriod(
                check_in=date.fromisoformat(item["check_in_date"]),
                check_out=date.fromisoformat(item["check_out_date"]),
            ),
            total_amount=Amount(item["total_amount"]),
        )
