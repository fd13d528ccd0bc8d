from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.hotel.domain import HotelId
from services.room.domain import RoomCriteria, RoomDetails, RoomPatch
from services.shared.domain import PageRequest
from services.shared.utils import to_decimal


class CreateRoomRequest(BaseModel):
    """部屋登録リクエストモデル"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    number: int = Field(..., gt=0, examples=[101])
    room_type: str = Field(..., alias="type", min_length=1, examples=["double"])
    capacity: int = Field(..., gt=0)
    price: Decimal = Field(..., gt=0, examples=["120.00"])
    amenities: str | None = None
    hotel_id: str | None = Field(default=None, alias="HotelId", min_length=1)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v: object) -> object:
        return to_decimal(v)

    def to_details(self) -> RoomDetails:
        return RoomDetails(
            number=self.number,
            room_type=self.room_type,
            capacity=self.capacity,
            price=self.price,
            amenities=self.amenities,
            hotel_id=self.hotel_id,
        )


class UpdateRoomRequest(BaseModel):
    """部屋更新リクエストモデル（送られた項目のみ更新）"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    number: int | None = Field(default=None, gt=0)
    room_type: str | None = Field(default=None, alias="type", min_length=1)
    capacity: int | None = Field(default=None, gt=0)
    price: Decimal | None = Field(default=None, gt=0)
    amenities: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v: object) -> object:
        return to_decimal(v)

    def to_patch(self) -> RoomPatch:
        return RoomPatch(**self.model_dump(exclude_unset=True))


class ListRoomsQuery(BaseModel):
    """部屋一覧のクエリパラメータ"""

    model_config = ConfigDict(populate_by_name=True)

    offset: int = Field(default=0, ge=0)
    limit: int = Field(
        default=PageRequest.DEFAULT_LIMIT, ge=1, le=PageRequest.MAX_LIMIT
    )
    room_type: str | None = Field(default=None, alias="type")
    hotel_id: str | None = Field(default=None, alias="HotelId")
    min_price: Decimal | None = Field(default=None, alias="minPrice")
    max_price: Decimal | None = Field(default=None, alias="maxPrice")

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def convert_price(cls, v: object) -> object:
        return to_decimal(v)

    def to_criteria(self) -> RoomCriteria:
        return RoomCriteria(
            room_type=self.room_type,
            hotel_id=HotelId(value=self.hotel_id) if self.hotel_id else None,
            min_price=self.min_price,
            max_price=self.max_price,
        )

    def to_page(self) -> PageRequest:
        return PageRequest(offset=self.offset, limit=self.limit)
