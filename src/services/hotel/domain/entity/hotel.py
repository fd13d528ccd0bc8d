from typing import TypedDict

from services.hotel.domain.value_object import HotelId, HotelName
from services.shared.domain import AggregateRoot


class HotelPatch(TypedDict, total=False):
    """ホテルの部分更新データ"""

    name: str
    address: str | None
    city: str | None
    state: str | None


class Hotel(AggregateRoot[HotelId]):
    """ホテルエンティティ"""

    def __init__(
        self,
        id: HotelId,
        name: HotelName,
        address: str | None = None,
        city: str | None = None,
        state: str | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        self._name = name
        self._address = address
        self._city = city
        self._state = state

    @property
    def name(self) -> HotelName:
        return self._name

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def city(self) -> str | None:
        return self._city

    @property
    def state(self) -> str | None:
        return self._state

    def apply(self, patch: HotelPatch) -> None:
        """指定された項目だけを更新する"""
        if "name" in patch:
            self._name = HotelName(value=patch["name"])
        if "address" in patch:
            self._address = patch["address"]
        if "city" in patch:
            self._city = patch["city"]
        if "state" in patch:
            self._state = patch["state"]
