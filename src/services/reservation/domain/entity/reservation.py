from datetime import date
from decimal import Decimal
from typing import TypedDict

from services.reservation.domain.value_object import ReservationId, StayPeriod
from services.room.domain import RoomId
from services.shared.domain import Amount, Entity
from services.user.domain import UserId


class ReservationPatch(TypedDict, total=False):
    """予約の部分更新データ"""

    check_in_date: date
    check_out_date: date
    total_amount: Decimal
    room_id: str
    user_id: str


class Reservation(Entity[ReservationId]):
    """予約エンティティ（部屋・利用者・滞在期間・合計金額）"""

    def __init__(
        self,
        id: ReservationId,
        room_id: RoomId,
        user_id: UserId,
        stay_period: StayPeriod,
        total_amount: Amount,
    ) -> None:
        super().__init__(id)
        self._room_id = room_id
        self._user_id = user_id
        self._stay_period = stay_period
        self._total_amount = total_amount

    @property
    def room_id(self) -> RoomId:
        return self._room_id

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def stay_period(self) -> StayPeriod:
        return self._stay_period

    @property
    def total_amount(self) -> Amount:
        return self._total_amount

    def is_completed(self, today: date) -> bool:
        """チェックアウト日が過ぎた予約は完了済み"""
        return self._stay_period.ends_before(today)

    def apply(self, patch: ReservationPatch) -> None:
        """指定された項目を既存の値とマージして更新する

        検証はすべての値が揃ってから行い、失敗した場合は何も変更しない。
        """
        stay_period = StayPeriod(
            check_in=patch.get("check_in_date", self._stay_period.check_in),
            check_out=patch.get("check_out_date", self._stay_period.check_out),
        )
        total_amount = (
            Amount(patch["total_amount"])
            if "total_amount" in patch
            else self._total_amount
        )
        room_id = (
            RoomId(value=patch["room_id"]) if "room_id" in patch else self._room_id
        )
        user_id = (
            UserId(value=patch["user_id"]) if "user_id" in patch else self._user_id
        )

        self._stay_period = stay_period
        self._total_amount = total_amount
        self._room_id = room_id
        self._user_id = user_id
