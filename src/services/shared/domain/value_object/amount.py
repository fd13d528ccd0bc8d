from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from services.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class Amount:
    """正の金額（料金・合計金額）"""

    value: Decimal

    def __post_init__(self) -> None:
        try:
            value = Decimal(str(self.value))
        except InvalidOperation as e:
            raise ValidationException(f"Invalid amount: {self.value}") from e
        if not value.is_finite() or value <= 0:
            raise ValidationException("Amount must be greater than zero")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return str(self.value)

    def times(self, count: int) -> Amount:
        """金額を count 倍する"""
        return Amount(self.value * count)
