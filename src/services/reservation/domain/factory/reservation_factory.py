from datetime import date
from decimal import Decimal
from typing import TypedDict

from services.reservation.domain.entity import Reservation
from services.reservation.domain.value_object import ReservationId, StayPeriod
from services.room.domain import RoomId
from services.shared.domain import Amount
from services.user.domain import UserId


class ReservationDetails(TypedDict):
    """予約登録の入力データ構造（TypedDict）"""

    check_in_date: date
    check_out_date: date
    total_amount: Decimal
    room_id: str
    user_id: str


class ReservationFactory:
    """予約ファクトリ"""

    def create(self, details: ReservationDetails) -> Reservation:
        """新規予約エンティティを生成する

        日付と金額の検証に失敗した場合は ValidationException を送出する。
        """
        stay_period = StayPeriod(
            check_in=details["check_in_date"],
            check_out=details["check_out_date"],
        )
        return Reservation(
            id=ReservationId.generate(),
            room_id=RoomId(value=details["room_id"]),
            user_id=UserId(value=details["user_id"]),
            stay_period=stay_period,
            total_amount=Amount(details["total_amount"]),
        )
