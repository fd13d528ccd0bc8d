from dataclasses import dataclass

from services.shared.domain import ValidationException


@dataclass(frozen=True)
class HotelName:
    """ホテル名（一意性の判定は登録時の表記のまま行う）"""

    value: str

    MAX_LENGTH = 100

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationException("Hotel name cannot be empty")
        if len(self.value) > self.MAX_LENGTH:
            raise ValidationException(
                f"Hotel name is too long (max {self.MAX_LENGTH} characters)"
            )

    def __str__(self) -> str:
        return self.value
