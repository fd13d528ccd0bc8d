from dataclasses import dataclass

from services.shared.domain import ValidationException


@dataclass(frozen=True)
class RoomNumber:
    """部屋番号（ホテル内で一意な正の整数）"""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationException("Room number must be an integer")
        if self.value <= 0:
            raise ValidationException("Room number must be positive")

    def __str__(self) -> str:
        return str(self.value)
