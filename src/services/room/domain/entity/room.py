from decimal import Decimal
from typing import TypedDict

from services.hotel.domain import HotelId
from services.room.domain.value_object import RoomId, RoomNumber
from services.shared.domain import AggregateRoot, Amount, ValidationException


class RoomPatch(TypedDict, total=False):
    """部屋の部分更新データ"""

    number: int
    room_type: str
    capacity: int
    price: Decimal
    amenities: str | None


def _validate_room_type(room_type: str) -> str:
    if not room_type or not room_type.strip():
        raise ValidationException("Room type cannot be empty")
    return room_type


def _validate_capacity(capacity: int) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValidationException("Capacity must be a positive integer")
    return capacity


class Room(AggregateRoot[RoomId]):
    """部屋エンティティ

    version は予約の登録・変更でも進むため、部屋単位のロックを兼ねる。
    """

    def __init__(
        self,
        id: RoomId,
        number: RoomNumber,
        room_type: str,
        capacity: int,
        price: Amount,
        amenities: str | None = None,
        hotel_id: HotelId | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._number = number
        self._room_type = _validate_room_type(room_type)
        self._capacity = _validate_capacity(capacity)
        self._price = price
        self._amenities = amenities
        self._hotel_id = hotel_id

    @property
    def number(self) -> RoomNumber:
        return self._number

    @property
    def room_type(self) -> str:
        return self._room_type

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def price(self) -> Amount:
        """1泊あたりの料金"""
        return self._price

    @property
    def amenities(self) -> str | None:
        return self._amenities

    @property
    def hotel_id(self) -> HotelId | None:
        return self._hotel_id

    def apply(self, patch: RoomPatch) -> None:
        """指定された項目だけを更新する"""
        if "number" in patch:
            self._number = RoomNumber(value=patch["number"])
        if "room_type" in patch:
            self._room_type = _validate_room_type(patch["room_type"])
        if "capacity" in patch:
            self._capacity = _validate_capacity(patch["capacity"])
        if "price" in patch:
            self._price = Amount(patch["price"])
        if "amenities" in patch:
            self._amenities = patch["amenities"]
