from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from services.reservation.domain import Reservation


class ReservationData(BaseModel):
    """予約データのレスポンスモデル"""

    id: str
    check_in_date: date = Field(serialization_alias="checkInDate")
    check_out_date: date = Field(serialization_alias="checkOutDate")
    total_amount: Decimal = Field(serialization_alias="totalAmount")
    room_id: str = Field(serialization_alias="RoomId")
    user_id: str = Field(serialization_alias="UserId")


def to_data(reservation: Reservation) -> dict:
    """Reservation エンティティをレスポンス辞書に変換する"""
    return ReservationData(
        id=str(reservation.id),
        check_in_date=reservation.stay_period.check_in,
        check_out_date=reservation.stay_period.check_out,
        total_amount=reservation.total_amount.value,
        room_id=str(reservation.room_id),
        user_id=str(reservation.user_id),
    ).model_dump(mode="json", by_alias=True)
