from collections.abc import Iterator
from datetime import date

from boto3.dynamodb.conditions import Attr, Key

from services.hotel.domain import HotelId
from services.room.domain import (
    Room,
    RoomCriteria,
    RoomId,
    RoomNumber,
    RoomRepository,
)
from services.shared.domain import (
    Amount,
    DuplicateResourceException,
    OptimisticLockException,
    PageRequest,
    ResourceNotFoundException,
)
from services.shared.infrastructure import METADATA, DynamoDBStore, all_of

UNASSIGNED = "UNASSIGNED"
_VERSION_MATCHES = "#version = :expected"
_VERSION_NAMES = {"#version": "version"}


def room_pk(room_id: RoomId) -> str:
    return f"ROOM#{room_id}"


def _number_guard_key(hotel_id: HotelId | None, number: RoomNumber) -> dict:
    """ホテルごとの部屋番号ガードのキー（ホテル未所属は UNASSIGNED にまとめる）"""
    return {
        "PK": f"HOTEL#{hotel_id or UNASSIGNED}",
        "SK": f"ROOMNUMBER#{number}",
    }


class DynamoDBRoomRepository(RoomRepository):
    """DynamoDBを使用したRoomRepository の具象実装

    部屋番号の一意性はホテルのパーティションに置いたガードアイテムで担保する。
    部屋の登録ではホテルの version を進め、並行するホテル削除と競合させる。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def add(self, room: Room) -> None:
        tx = self._store.transaction()
        tx.put(
            self._to_item(room, version=0),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"Room already exists: {room.id}"
            ),
        )
        tx.put(
            self._number_guard(room),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"Room number already exists: {room.number}"
            ),
        )
        if room.hotel_id is not None:
            tx.update(
                {"PK": f"HOTEL#{room.hotel_id}", "SK": METADATA},
                "SET #version = #version + :one",
                condition="attribute_exists(PK)",
                names=_VERSION_NAMES,
                values={":one": 1},
                on_failure=lambda: ResourceNotFoundException(
                    f"Hotel not found: {room.hotel_id}"
                ),
            )
        tx.commit()

    def update(self, room: Room, previous_number: RoomNumber) -> None:
        tx = self._store.transaction()
        tx.put(
            self._to_item(room, version=room.version + 1),
            condition=_VERSION_MATCHES,
            names=_VERSION_NAMES,
            values={":expected": room.version},
            on_failure=lambda: OptimisticLockException(
                f"Room was modified concurrently: {room.id}"
            ),
        )
        if room.number != previous_number:
            tx.delete(_number_guard_key(room.hotel_id, previous_number))
            tx.put(
                self._number_guard(room),
                condition="attribute_not_exists(PK)",
                on_failure=lambda: DuplicateResourceException(
                    f"Room number already exists: {room.number}"
                ),
            )
        tx.commit()

    def remove(self, room: Room) -> None:
        """部屋を削除する

        予約の登録時に部屋の version が進むため、
        削除判定の後に予約が追加された場合はコミットが失敗する。
        """
        tx = self._store.transaction()
        tx.delete(
            {"PK": room_pk(room.id), "SK": METADATA},
            condition=_VERSION_MATCHES,
            names=_VERSION_NAMES,
            values={":expected": room.version},
            on_failure=lambda: OptimisticLockException(
                f"Room was modified concurrently: {room.id}"
            ),
        )
        tx.delete(_number_guard_key(room.hotel_id, room.number))
        tx.commit()

    def find_by_id(self, room_id: RoomId) -> Room | None:
        item = self._store.get(room_pk(room_id))
        if not item:
            return None
        return self._to_entity(item)

    def find_by_number(
        self, hotel_id: HotelId | None, number: RoomNumber
    ) -> Room | None:
        key = _number_guard_key(hotel_id, number)
        guard = self._store.get(key["PK"], key["SK"])
        if not guard:
            return None
        return self.find_by_id(RoomId(value=guard["room_id"]))

    def has_active_reservations(self, room_id: RoomId, today: date) -> bool:
        """チェックアウト済みの STAY# アイテムは履歴として残り、削除を妨げない"""
        stays = self._store.query_partition(room_pk(room_id), "STAY#")
        return any(stay["check_out_date"] >= today.isoformat() for stay in stays)

    def find_all(self, criteria: RoomCriteria, page: PageRequest) -> Iterator[Room]:
        items = self._store.query_index(
            Key("GSI1PK").eq("ROOMS"),
            all_of(
                [
                    Attr("room_type").eq(criteria.room_type)
                    if criteria.room_type
                    else None,
                    Attr("hotel_id").eq(str(criteria.hotel_id))
                    if criteria.hotel_id
                    else None,
                    Attr("price").gte(criteria.min_price)
                    if criteria.min_price is not None
                    else None,
                    Attr("price").lte(criteria.max_price)
                    if criteria.max_price is not None
                    else None,
                ]
            ),
        )
        return page.slice(self._to_entity(item) for item in items)

    def _to_item(self, room: Room, version: int) -> dict:
        item = {
            "PK": room_pk(room.id),
            "SK": METADATA,
            "entity_type": "ROOM",
            "room_id": str(room.id),
            "number": room.number.value,
            "room_type": room.room_type,
            "capacity": room.capacity,
            "price": room.price.value,
            "amenities": room.amenities,
            "version": version,
            "GSI1PK": "ROOMS",
            "GSI1SK": f"ROOM#{room.id}",
        }
        if room.hotel_id is not None:
            item["hotel_id"] = str(room.hotel_id)
        return item

    def _number_guard(self, room: Room) -> dict:
        return {
            **_number_guard_key(room.hotel_id, room.number),
            "entity_type": "ROOM_NUMBER",
            "room_id": str(room.id),
        }

    def _to_entity(self, item: dict) -> Room:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        hotel_id = item.get("hotel_id")
        return Room(
            id=RoomId(value=item["room_id"]),
            number=RoomNumber(value=int(item["number"])),
            room_type=item["room_type"],
            capacity=int(item["capacity"]),
            price=Amount(item["price"]),
            amenities=item.get("amenities"),
            hotel_id=HotelId(value=hotel_id) if hotel_id else None,
            version=int(item.get("version", 0)),
        )
