from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from itertools import islice
from typing import ClassVar, TypeVar

from services.shared.domain.exception import ValidationException

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """offset / limit によるページ指定"""

    MAX_LIMIT: ClassVar[int] = 100
    DEFAULT_LIMIT: ClassVar[int] = 20

    offset: int = 0
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationException("offset must be zero or greater")
        if not 1 <= self.limit <= self.MAX_LIMIT:
            raise ValidationException(
                f"limit must be between 1 and {self.MAX_LIMIT}"
            )

    def slice(self, items: Iterable[T]) -> Iterator[T]:
        """イテラブルから該当ページ分だけを遅延で取り出す"""
        return islice(items, self.offset, self.offset + self.limit)
