from decimal import Decimal

import pytest

from services.hotel.domain import HotelId
from services.room.domain import Room, RoomId, RoomNumber
from services.shared.domain import Amount


@pytest.fixture
def create_room():
    """Room を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        room_id: str = "room-1",
        number: int = 101,
        room_type: str = "double",
        capacity: int = 2,
        price: Decimal = Decimal("120.00"),
        amenities: str | None = "wifi",
        hotel_id: str | None = "hotel-1",
        version: int = 0,
    ) -> Room:
        return Room(
            id=RoomId(value=room_id),
            number=RoomNumber(value=number),
            room_type=room_type,
            capacity=capacity,
            price=Amount(price),
            amenities=amenities,
            hotel_id=HotelId(value=hotel_id) if hotel_id else None,
            version=version,
        )

    return _factory
