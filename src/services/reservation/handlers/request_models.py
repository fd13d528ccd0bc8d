from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.reservation.domain import (
    ReservationCriteria,
    ReservationDetails,
    ReservationPatch,
)
from services.room.domain import RoomId
from services.shared.domain import PageRequest
from services.shared.utils import to_decimal
from services.user.domain import UserId


class CreateReservationRequest(BaseModel):
    """予約登録リクエストモデル"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    check_in_date: date = Field(..., alias="checkInDate", examples=["2024-01-01"])
    check_out_date: date = Field(..., alias="checkOutDate", examples=["2024-01-05"])
    total_amount: Decimal = Field(..., alias="totalAmount", gt=0)
    room_id: str = Field(..., alias="RoomId", min_length=1)
    user_id: str = Field(..., alias="UserId", min_length=1)

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount(cls, v: object) -> object:
        return to_decimal(v)

    def to_details(self) -> ReservationDetails:
        return ReservationDetails(
            check_in_date=self.check_in_date,
            check_out_date=self.check_out_date,
            total_amount=self.total_amount,
            room_id=self.room_id,
            user_id=self.user_id,
        )


class UpdateReservationRequest(BaseModel):
    """予約更新リクエストモデル（送られた項目のみ更新）"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    check_in_date: date | None = Field(default=None, alias="checkInDate")
    check_out_date: date | None = Field(default=None, alias="checkOutDate")
    total_amount: Decimal | None = Field(default=None, alias="totalAmount", gt=0)
    room_id: str | None = Field(default=None, alias="RoomId", min_length=1)
    user_id: str | None = Field(default=None, alias="UserId", min_length=1)

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_amount(cls, v: object) -> object:
        return to_decimal(v)

    def to_patch(self) -> ReservationPatch:
        return ReservationPatch(
            **self.model_dump(exclude_unset=True, exclude_none=True)
        )


class ListReservationsQuery(BaseModel):
    """予約一覧のクエリパラメータ"""

    model_config = ConfigDict(populate_by_name=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(
        default=PageRequest.DEFAULT_LIMIT, ge=1, le=PageRequest.MAX_LIMIT
    )
    check_in_from: date | None = Field(default=None, alias="checkInFrom")
    check_out_to: date | None = Field(default=None, alias="checkOutTo")
    min_amount: Decimal | None = Field(default=None, alias="minAmount")
    max_amount: Decimal | None = Field(default=None, alias="maxAmount")
    room_id: str | None = Field(default=None, alias="RoomId")
    user_id: str | None = Field(default=None, alias="UserId")

    @field_validator("min_amount", "max_amount", mode="before")
    @classmethod
    def convert_amount(cls, v: object) -> object:
        return to_decimal(v)

    def to_criteria(self) -> ReservationCriteria:
        return ReservationCriteria(
            check_in_from=self.check_in_from,
            check_out_to=self.check_out_to,
            min_amount=self.min_amount,
            max_amount=self.max_amount,
            room_id=RoomId(value=self.room_id) if self.room_id else None,
            user_id=UserId(value=self.user_id) if self.user_id else None,
        )

    def to_page(self) -> PageRequest:
        return PageRequest(offset=self.offset, limit=self.limit)
