from collections.abc import Iterator

from boto3.dynamodb.conditions import Attr, Key

from services.hotel.domain import (
    Hotel,
    HotelCriteria,
    HotelId,
    HotelName,
    HotelRepository,
)
from services.shared.domain import (
    DuplicateResourceException,
    OptimisticLockException,
    PageRequest,
)
from services.shared.infrastructure import METADATA, DynamoDBStore, all_of

_UNIQUE = "UNIQUE"
_VERSION_MATCHES = "#version = :expected"
_VERSION_NAMES = {"#version": "version"}


def _hotel_pk(hotel_id: HotelId) -> str:
    return f"HOTEL#{hotel_id}"


def _name_guard_key(name: HotelName) -> dict:
    return {"PK": f"HOTELNAME#{name}", "SK": _UNIQUE}


class DynamoDBHotelRepository(HotelRepository):
    """DynamoDBを使用したHotelRepository の具象実装

    ホテル名の一意性は HOTELNAME# のガードアイテムで担保する。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def add(self, hotel: Hotel) -> None:
        """ホテルとホテル名ガードを同一トランザクションで登録する"""
        tx = self._store.transaction()
        tx.put(
            self._to_item(hotel, version=0),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"Hotel already exists: {hotel.id}"
            ),
        )
        tx.put(
            self._name_guard(hotel),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"Hotel name already exists: {hotel.name}"
            ),
        )
        tx.commit()

    def update(self, hotel: Hotel, previous_name: HotelName) -> None:
        tx = self._store.transaction()
        tx.put(
            self._to_item(hotel, version=hotel.version + 1),
            condition=_VERSION_MATCHES,
            names=_VERSION_NAMES,
            values={":expected": hotel.version},
            on_failure=lambda: OptimisticLockException(
                f"Hotel was modified concurrently: {hotel.id}"
            ),
        )
        if hotel.name != previous_name:
            tx.delete(_name_guard_key(previous_name))
            tx.put(
                self._name_guard(hotel),
                condition="attribute_not_exists(PK)",
                on_failure=lambda: DuplicateResourceException(
                    f"Hotel name already exists: {hotel.name}"
                ),
            )
        tx.commit()

    def remove(self, hotel: Hotel) -> None:
        """ホテルを削除する

        部屋の登録時にホテルの version が進むため、
        削除判定の後に部屋が追加された場合はコミットが失敗する。
        """
        tx = self._store.transaction()
        tx.delete(
            {"PK": _hotel_pk(hotel.id), "SK": METADATA},
            condition=_VERSION_MATCHES,
            names=_VERSION_NAMES,
            values={":expected": hotel.version},
            on_failure=lambda: OptimisticLockException(
                f"Hotel was modified concurrently: {hotel.id}"
            ),
        )
        tx.delete(_name_guard_key(hotel.name))
        tx.commit()

    def find_by_id(self, hotel_id: HotelId) -> Hotel | None:
        item = self._store.get(_hotel_pk(hotel_id))
        if not item:
            return None
        return self._to_entity(item)

    def find_by_name(self, name: HotelName) -> Hotel | None:
        guard = self._store.get(f"HOTELNAME#{name}", _UNIQUE)
        if not guard:
            return None
        return self.find_by_id(HotelId(value=guard["hotel_id"]))

    def has_rooms(self, hotel_id: HotelId) -> bool:
        return bool(self._store.query_partition(_hotel_pk(hotel_id), "ROOMNUMBER#"))

    def find_all(self, criteria: HotelCriteria, page: PageRequest) -> Iterator[Hotel]:
        items = self._store.query_index(
            Key("GSI1PK").eq("HOTELS"),
            all_of(
                [
                    Attr("city").eq(criteria.city) if criteria.city else None,
                    Attr("state").eq(criteria.state) if criteria.state else None,
                ]
            ),
        )
        return page.slice(self._to_entity(item) for item in items)

    def _to_item(self, hotel: Hotel, version: int) -> dict:
        return {
            "PK": _hotel_pk(hotel.id),
            "SK": METADATA,
            "entity_type": "HOTEL",
            "hotel_id": str(hotel.id),
            "name": str(hotel.name),
            "address": hotel.address,
            "city": hotel.city,
            "state": hotel.state,
            "version": version,
            "GSI1PK": "HOTELS",
            "GSI1SK": f"HOTEL#{hotel.id}",
        }

    def _name_guard(self, hotel: Hotel) -> dict:
        return {
            **_name_guard_key(hotel.name),
            "entity_type": "HOTEL_NAME",
            "hotel_id": str(hotel.id),
        }

    def _to_entity(self, item: dict) -> Hotel:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Hotel(
            id=HotelId(value=item["hotel_id"]),
            name=HotelName(value=item["name"]),
            address=item.get("address"),
            city=item.get("city"),
            state=item.get("state"),
            version=int(item.get("version", 0)),
        )
