from dataclasses import dataclass

from services.shared.domain import AuthenticationException


@dataclass(frozen=True)
class Identity:
    """認証済みの利用者（トークンのクレームから復元する）"""

    user_id: str
    username: str
    role: str

    def __post_init__(self) -> None:
        if not self.user_id or not self.username or not self.role:
            raise AuthenticationException("Identity is incomplete")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
