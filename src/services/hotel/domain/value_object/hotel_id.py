from __future__ import annotations

import uuid
from dataclasses import dataclass

from services.shared.domain import ValidationException


@dataclass(frozen=True)
class HotelId:
    """ホテルID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationException("Hotel id cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> HotelId:
        return cls(value=str(uuid.uuid4()))
