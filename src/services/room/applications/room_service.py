from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date

from aws_lambda_powertools import Logger

from services.hotel.domain import HotelRepository
from services.room.domain import (
    Room,
    RoomCriteria,
    RoomDetails,
    RoomFactory,
    RoomId,
    RoomPatch,
    RoomRepository,
)
from services.shared.domain import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    PageRequest,
    ResourceNotFoundException,
)

logger = Logger(child=True)


class RoomService:
    """部屋管理のユースケース"""

    def __init__(
        self,
        repository: RoomRepository,
        hotels: HotelRepository,
        factory: RoomFactory | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repository = repository
        self._hotels = hotels
        self._factory = factory or RoomFactory()
        self._today = today

    def create(self, details: RoomDetails) -> Room:
        """部屋を登録する

        - 所属ホテルが指定された場合はその存在を確認する
        - 同じホテル内で部屋番号は重複できない
        """
        room = self._factory.create(details)
        if room.hotel_id is not None and self._hotels.find_by_id(room.hotel_id) is None:
            raise ResourceNotFoundException(f"Hotel not found: {room.hotel_id}")
        self._ensure_number_available(room)

        self._repository.add(room)
        logger.info(
            "Room created",
            extra={"room_id": str(room.id), "hotel_id": str(room.hotel_id)},
        )
        return room

    def get_by_id(self, room_id: RoomId) -> Room:
        room = self._repository.find_by_id(room_id)
        if room is None:
            raise ResourceNotFoundException(f"Room not found: {room_id}")
        return room

    def update(self, room_id: RoomId, patch: RoomPatch) -> Room:
        room = self.get_by_id(room_id)
        previous_number = room.number
        room.apply(patch)
        if room.number != previous_number:
            self._ensure_number_available(room)
        self._repository.update(room, previous_number=previous_number)
        logger.info("Room updated", extra={"room_id": str(room.id)})
        return room

    def delete(self, room_id: RoomId) -> Room:
        """部屋を削除する（完了していない予約が残っている場合は削除できない）"""
        room = self.get_by_id(room_id)
        if self._repository.has_active_reservations(room.id, self._today()):
            raise BusinessRuleViolationException(
                f"Room still has reservations and cannot be deleted: {room.id}"
            )
        self._repository.remove(room)
        logger.info("Room deleted", extra={"room_id": str(room.id)})
        return room

    def list(self, criteria: RoomCriteria, page: PageRequest) -> Iterator[Room]:
        return self._repository.find_all(criteria, page)

    def _ensure_number_available(self, room: Room) -> None:
        existing = self._repository.find_by_number(room.hotel_id, room.number)
        if existing is not None and existing.id != room.id:
            logger.warning(
                "Room number already exists",
                extra={"hotel_id": str(room.hotel_id), "number": room.number.value},
            )
            raise DuplicateResourceException(
                f"Room number already exists: {room.number}"
            )
