from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from services.shared.domain import ValidationException


@dataclass(frozen=True)
class StayPeriod:
    """滞在期間(チェックイン日 + チェックアウト日)

    チェックアウト日は含まない半開区間 [check_in, check_out) として扱う。
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if not isinstance(self.check_in, date) or not isinstance(self.check_out, date):
            raise ValidationException("Check-in and check-out must be dates")
        if self.check_out <= self.check_in:
            raise ValidationException("Check-out date must be after check-in date")

    @classmethod
    def from_iso(cls, check_in: str, check_out: str) -> StayPeriod:
        """ISO 形式 (YYYY-MM-DD) の文字列から生成する"""
        try:
            return cls(
                check_in=date.fromisoformat(check_in),
                check_out=date.fromisoformat(check_out),
            )
        except (TypeError, ValueError) as e:
            raise ValidationException(f"Invalid date format: {e}") from e

    def nights(self) -> int:
        """宿泊数を計算する"""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: StayPeriod) -> bool:
        """1泊でも重なるか（チェックアウト日と次のチェックイン日が同じなら重ならない）"""
        return self.check_in < other.check_out and other.check_in < self.check_out

    def ends_before(self, day: date) -> bool:
        return self.check_out < day
