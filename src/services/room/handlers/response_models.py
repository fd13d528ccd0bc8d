from decimal import Decimal

from pydantic import BaseModel, Field

from services.room.domain import Room


class RoomData(BaseModel):
    """部屋データのレスポンスモデル"""

    id: str
    number: int
    room_type: str = Field(serialization_alias="type")
    capacity: int
    price: Decimal
    amenities: str | None
    hotel_id: str | None = Field(serialization_alias="HotelId")


def to_data(room: Room) -> dict:
    """Room エンティティをレスポンス辞書に変換する"""
    return RoomData(
        id=str(room.id),
        number=room.number.value,
        room_type=room.room_type,
        capacity=room.capacity,
        price=room.price.value,
        amenities=room.amenities,
        hotel_id=str(room.hotel_id) if room.hotel_id else None,
    ).model_dump(mode="json", by_alias=True)
