from dataclasses import dataclass

from services.shared.domain import ValidationException


@dataclass(frozen=True)
class Username:
    """ログイン名（1〜64文字、前後の空白は不可）"""

    value: str
    MAX_LENGTH = 64

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationException("Username cannot be empty")
        if self.value != self.value.strip():
            raise ValidationException("Username cannot start or end with spaces")
        if len(self.value) > self.MAX_LENGTH:
            raise ValidationException(
                f"Username must be at most {self.MAX_LENGTH} characters"
            )

    def __str__(self) -> str:
        return self.value
