from decimal import Decimal
from typing import TypedDict

from services.hotel.domain import HotelId
from services.room.domain.entity import Room
from services.room.domain.value_object import RoomId, RoomNumber
from services.shared.domain import Amount


class RoomDetails(TypedDict):
    """部屋登録の入力データ構造（TypedDict）"""

    number: int
    room_type: str
    capacity: int
    price: Decimal
    amenities: str | None
    hotel_id: str | None


class RoomFactory:
    """部屋ファクトリ"""

    def create(self, details: RoomDetails) -> Room:
        """新規部屋エンティティを生成する"""
        hotel_id = details.get("hotel_id")
        return Room(
            id=RoomId.generate(),
            number=RoomNumber(value=details["number"]),
            room_type=details["room_type"],
            capacity=details["capacity"],
            price=Amount(details["price"]),
            amenities=details.get("amenities"),
            hotel_id=HotelId(value=hotel_id) if hotel_id else None,
        )
