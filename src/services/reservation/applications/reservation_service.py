from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date

from aws_lambda_powertools import Logger

from services.reservation.domain import (
    Reservation,
    ReservationCriteria,
    ReservationDetails,
    ReservationFactory,
    ReservationId,
    ReservationPatch,
    ReservationRepository,
    RoomSchedule,
)
from services.room.domain import RoomId
from services.shared.domain import (
    BusinessRuleViolationException,
    OptimisticLockException,
    PageRequest,
    ResourceNotFoundException,
)
from services.user.domain import UserId, UserRepository

logger = Logger(child=True)


class ReservationService:
    """予約管理のユースケース

    同じ部屋で宿泊期間が重なる予約は、並行に登録された場合も含めて1件しか成立しない。
    """

    def __init__(
        self,
        repository: ReservationRepository,
        users: UserRepository,
        factory: ReservationFactory | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = repository
        self._users = users
        self._factory = factory or ReservationFactory()
        self._today = today

    def create(self, details: ReservationDetails) -> Reservation:
        """予約を登録する

        - 日付と金額の検証に失敗した場合は ValidationException
        - 部屋または利用者が存在しない場合は ResourceNotFoundException
        - 宿泊期間が重なる場合は OverlappingReservationException
        - 読み取り後に同じ部屋の予約が確定した場合、その予約と重なれば
          OverlappingReservationException、重ならなければ OptimisticLockException
          （書き込みは再試行しない）
        """
        reservation = self._factory.create(details)
        schedule = self._load_schedule(reservation.room_id)
        self._ensure_user_exists(reservation.user_id)
        schedule.reserve(reservation.id, reservation.stay_period)
        self._warn_if_amount_differs(reservation, schedule)

        try:
            self._repository.add(reservation, schedule)
        except OptimisticLockException:
            logger.info(
                "Room was booked concurrently",
                extra={"room_id": str(reservation.room_id)},
            )
            self._raise_if_overlapping_now(reservation)
            raise
        logger.info(
            "Reservation created",
            extra={
                "reservation_id": str(reservation.id),
                "room_id": str(reservation.room_id),
                "check_in": reservation.stay_period.check_in.isoformat(),
                "check_out": reservation.stay_period.check_out.isoformat(),
            },
        )
        return reservation

    def get_by_id(self, reservation_id: ReservationId) -> Reservation:
        reservation = self._repository.find_by_id(reservation_id)
        if reservation is None:
            raise ResourceNotFoundException(f"Reservation not found: {reservation_id}")
        return reservation

    def update(
        self, reservation_id: ReservationId, patch: ReservationPatch
    ) -> Reservation:
        """予約を更新する（チェックアウト済みの予約は変更できない）"""
        reservation = self.get_by_id(reservation_id)
        if reservation.is_completed(self._today()):
            raise BusinessRuleViolationException(
                f"Completed reservation cannot be modified: {reservation.id}"
            )
        previous_room_id = reservation.room_id
        previous_user_id = reservation.user_id

        reservation.apply(patch)

        schedule = self._load_schedule(reservation.room_id)
        released_from: RoomSchedule | None = None
        if reservation.room_id != previous_room_id:
            released_from = self._repository.find_schedule(previous_room_id)
            if released_from is not None:
                released_from.release(reservation.id)

        user_changed = reservation.user_id != previous_user_id
        if user_changed:
            self._ensure_user_exists(reservation.user_id)

        schedule.reserve(reservation.id, reservation.stay_period)
        self._warn_if_amount_differs(reservation, schedule)

        self._repository.update(
            reservation,
            schedule,
            released_from=released_from,
            verify_user=user_changed,
        )
        logger.info(
            "Reservation updated",
            extra={
                "reservation_id": str(reservation.id),
                "room_id": str(reservation.room_id),
                "moved_from": str(previous_room_id) if released_from else None,
            },
        )
        return reservation

    def delete(self, reservation_id: ReservationId) -> Reservation:
        """予約を取り消す（滞在も同時に削除される）"""
        reservation = self.get_by_id(reservation_id)
        schedule = self._repository.find_schedule(reservation.room_id)
        if schedule is not None:
            schedule.release(reservation.id)
        self._repository.remove(reservation, schedule)
        logger.info(
            "Reservation cancelled", extra={"reservation_id": str(reservation.id)}
        )
        return reservation

    def list(
        self, criteria: ReservationCriteria, page: PageRequest
    ) -> Iterator[Reservation]:
        return self._repository.find_all(criteria, page)

    def _raise_if_overlapping_now(self, reservation: Reservation) -> None:
        """最新の予約状況で重なりを判定し直す（判定のみで書き込まない）"""
        latest = self._load_schedule(reservation.room_id)
        latest.reserve(reservation.id, reservation.stay_period)

    def _load_schedule(self, room_id: RoomId) -> RoomSchedule:
        schedule = self._repository.find_schedule(room_id)
        if schedule is None:
            raise ResourceNotFoundException(f"Room not found: {room_id}")
        return schedule

    def _ensure_user_exists(self, user_id: UserId) -> None:
        if self._users.find_by_id(user_id) is None:
            raise ResourceNotFoundException(f"User not found: {user_id}")

    def _warn_if_amount_differs(
        self, reservation: Reservation, schedule: RoomSchedule
    ) -> None:
        expected = schedule.expected_total(reservation.stay_period)
        if reservation.total_amount != expected:
            logger.warning(
                "Total amount differs from nightly rate",
                extra={
                    "reservation_id": str(reservation.id),
                    "total_amount": str(reservation.total_amount),
                    "expected_amount": str(expected),
                },
            )
