from abc import abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from services.reservation.domain.entity import Reservation, RoomSchedule
from services.reservation.domain.value_object import ReservationId
from services.room.domain import RoomId
from services.shared.domain import Repository
from services.user.domain import UserId


@dataclass(frozen=True)
class ReservationCriteria:
    """予約一覧の絞り込み条件（指定された項目のみ適用）

    check_in_from / check_out_to は滞在全体がその範囲に収まる予約を対象とする。
    """

    check_in_from: date | None = None
    check_out_to: date | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    room_id: RoomId | None = None
    user_id: UserId | None = None


class ReservationRepository(
    Repository[Reservation, ReservationId, ReservationCriteria]
):
    """予約レポジトリのインターフェース

    変更系の操作はすべて1つのトランザクションでコミットし、
    対象の部屋の version を条件付きで進める。
    """

    @abstractmethod
    def find_schedule(self, room_id: RoomId) -> RoomSchedule | None:
        """部屋の予約スケジュールを取得する（部屋が存在しなければ None）"""
        raise NotImplementedError

    @abstractmethod
    def add(self, reservation: Reservation, schedule: RoomSchedule) -> None:
        """予約を登録する

        - 読み取り後に部屋が更新されていれば OptimisticLockException
        - 利用者が存在しなければ ResourceNotFoundException
        """
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        reservation: Reservation,
        schedule: RoomSchedule,
        released_from: RoomSchedule | None = None,
        verify_user: bool = False,
    ) -> None:
        """予約を更新する

        released_from は部屋を移動した場合の移動元のスケジュール。
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, reservation: Reservation, schedule: RoomSchedule | None) -> None:
        raise NotImplementedError
