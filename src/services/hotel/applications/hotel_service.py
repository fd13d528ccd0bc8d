from __future__ import annotations

from collections.abc import Iterator
from typing import TypedDict

from aws_lambda_powertools import Logger

from services.hotel.domain import (
    Hotel,
    HotelCriteria,
    HotelId,
    HotelName,
    HotelPatch,
    HotelRepository,
)
from services.shared.domain import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    PageRequest,
    ResourceNotFoundException,
)

logger = Logger(child=True)


class HotelDetails(TypedDict):
    """ホテル登録の入力データ構造"""

    name: str
    address: str | None
    city: str | None
    state: str | None


class HotelService:
    """ホテル管理のユースケース"""

    def __init__(self, repository: HotelRepository) -> None:
        self._repository = repository

    def create(self, details: HotelDetails) -> Hotel:
        """ホテルを登録する（同名のホテルは登録できない）"""
        name = HotelName(value=details["name"])
        if self._repository.find_by_name(name) is not None:
            logger.warning("Hotel already exists", extra={"hotel_name": str(name)})
            raise DuplicateResourceException(f"Hotel name already exists: {name}")

        hotel = Hotel(
            id=HotelId.generate(),
            name=name,
            address=details.get("address"),
            city=details.get("city"),
            state=details.get("state"),
        )
        self._repository.add(hotel)
        logger.info("Hotel created", extra={"hotel_id": str(hotel.id)})
        return hotel

    def get_by_id(self, hotel_id: HotelId) -> Hotel:
        hotel = self._repository.find_by_id(hotel_id)
        if hotel is None:
            raise ResourceNotFoundException(f"Hotel not found: {hotel_id}")
        return hotel

    def update(self, hotel_id: HotelId, patch: HotelPatch) -> Hotel:
        hotel = self.get_by_id(hotel_id)
        previous_name = hotel.name
        hotel.apply(patch)
        self._repository.update(hotel, previous_name=previous_name)
        logger.info("Hotel updated", extra={"hotel_id": str(hotel.id)})
        return hotel

    def delete(self, hotel_id: HotelId) -> Hotel:
        """ホテルを削除する（部屋が残っている場合は削除できない）"""
        hotel = self.get_by_id(hotel_id)
        if self._repository.has_rooms(hotel.id):
            raise BusinessRuleViolationException(
                f"Hotel still has rooms and cannot be deleted: {hotel.id}"
            )
        self._repository.remove(hotel)
        logger.info("Hotel deleted", extra={"hotel_id": str(hotel.id)})
        return hotel

    def list(self, criteria: HotelCriteria, page: PageRequest) -> Iterator[Hotel]:
        return self._repository.find_all(criteria, page)
