from abc import abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from services.hotel.domain import HotelId
from services.room.domain.entity import Room
from services.room.domain.value_object import RoomId, RoomNumber
from services.shared.domain import Repository


@dataclass(frozen=True)
class RoomCriteria:
    """部屋一覧の絞り込み条件（指定された項目のみ適用）"""

    room_type: str | None = None
    hotel_id: HotelId | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None


class RoomRepository(Repository[Room, RoomId, RoomCriteria]):
    """部屋レポジトリのインターフェース"""

    @abstractmethod
    def add(self, room: Room) -> None:
        """部屋を登録する

        - 同じホテル内の部屋番号の重複は DuplicateResourceException
        - 所属ホテルが存在しない場合は ResourceNotFoundException
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, room: Room, previous_number: RoomNumber) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, room: Room) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_number(
        self, hotel_id: HotelId | None, number: RoomNumber
    ) -> Room | None:
        """ホテル内の部屋番号で検索する"""
        raise NotImplementedError

    @abstractmethod
    def has_active_reservations(self, room_id: RoomId, today: date) -> bool:
        """チェックアウト日が today 以降の予約が部屋に残っているか"""
        raise NotImplementedError
