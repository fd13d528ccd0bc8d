from abc import abstractmethod
from dataclasses import dataclass

from services.hotel.domain.entity import Hotel
from services.hotel.domain.value_object import HotelId, HotelName
from services.shared.domain import Repository


@dataclass(frozen=True)
class HotelCriteria:
    """ホテル一覧の絞り込み条件（指定された項目のみ適用）"""

    city: str | None = None
    state: str | None = None


class HotelRepository(Repository[Hotel, HotelId, HotelCriteria]):
    """ホテルレポジトリのインターフェース"""

    @abstractmethod
    def add(self, hotel: Hotel) -> None:
        """ホテルを新規登録する（ホテル名の重複は DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def update(self, hotel: Hotel, previous_name: HotelName) -> None:
        """ホテルを更新する（バージョン不一致は OptimisticLockException）"""
        raise NotImplementedError

    @abstractmethod
    def remove(self, hotel: Hotel) -> None:
        """ホテルを削除する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_name(self, name: HotelName) -> Hotel | None:
        """ホテル名で検索する"""
        raise NotImplementedError

    @abstractmethod
    def has_rooms(self, hotel_id: HotelId) -> bool:
        """ホテルに部屋が登録されているか"""
        raise NotImplementedError
