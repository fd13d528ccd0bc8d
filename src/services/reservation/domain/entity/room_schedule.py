from collections.abc import Mapping

from services.reservation.domain.value_object import ReservationId, StayPeriod
from services.room.domain import RoomId
from services.shared.domain import (
    AggregateRoot,
    Amount,
    OverlappingReservationException,
)


class RoomSchedule(AggregateRoot[RoomId]):
    """部屋ごとの予約スケジュール集約

    部屋の version を読んでから滞在一覧を読む。永続化時にその version を
    条件として進めるため、読み取り後に別の予約が確定していればコミットは失敗する。
    """

    def __init__(
        self,
        id: RoomId,
        nightly_rate: Amount,
        stays: Mapping[ReservationId, StayPeriod] | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._nightly_rate = nightly_rate
        self._stays = dict(stays or {})

    @property
    def nightly_rate(self) -> Amount:
        return self._nightly_rate

    @property
    def stays(self) -> dict[ReservationId, StayPeriod]:
        return dict(self._stays)

    def reserve(self, reservation_id: ReservationId, period: StayPeriod) -> None:
        """滞在を追加する（同じ予約の既存の滞在は置き換える）"""
        for other_id, other in self._stays.items():
            if other_id != reservation_id and other.overlaps(period):
                raise OverlappingReservationException(
                    f"Room {self.id} is already reserved "
                    f"from {other.check_in} to {other.check_out}"
                )
        self._stays[reservation_id] = period

    def release(self, reservation_id: ReservationId) -> None:
        self._stays.pop(reservation_id, None)

    def expected_total(self, period: StayPeriod) -> Amount:
        """1泊料金 × 宿泊数"""
        return self._nightly_rate.times(period.nights())
