from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

from services.shared.domain.value_object.page_request import PageRequest

T = TypeVar("T")
ID = TypeVar("ID")
C = TypeVar("C")


class Repository(ABC, Generic[T, ID, C]):
    """Repository 基底クラス

    - 集約の永続化を抽象化する
    - 変更系の操作は集約ごとにアトミックな単位でコミットする
    """

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで集約を検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, criteria: C, page: PageRequest) -> Iterator[T]:
        """条件に一致する集約を遅延評価で1ページ分返す"""
        raise NotImplementedError
