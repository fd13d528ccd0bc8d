from collections.abc import Iterable
from typing import TypedDict

from services.shared.domain import AggregateRoot, ValidationException
from services.user.domain.enum import Role
from services.user.domain.value_object import UserId, Username


class UserPatch(TypedDict, total=False):
    """利用者の部分更新データ（パスワードはハッシュ化済みで渡す）"""

    username: str
    password_hash: str
    role: str
    full_name: str
    roles: list[str]


def _validate_full_name(full_name: str) -> str:
    if not full_name or not full_name.strip():
        raise ValidationException("Full name cannot be empty")
    return full_name


def _to_role(role: str | Role) -> Role:
    try:
        return Role(role)
    except ValueError as e:
        raise ValidationException(f"Unknown role: {role}") from e


class User(AggregateRoot[UserId]):
    """利用者エンティティ（パスワードはハッシュのみ保持する）"""

    def __init__(
        self,
        id: UserId,
        username: Username,
        password_hash: str,
        role: Role | str,
        full_name: str,
        roles: Iterable[str] = (),
        version: int = 0,
    ) -> None:
        super().__init__(id, version)
        if not password_hash:
            raise ValidationException("Password hash cannot be empty")
        self._username = username
        self._password_hash = password_hash
        self._role = _to_role(role)
        self._full_name = _validate_full_name(full_name)
        self._roles = tuple(roles)

    @property
    def username(self) -> Username:
        return self._username

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> Role:
        return self._role

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def roles(self) -> tuple[str, ...]:
        """補助的なロールタグ"""
        return self._roles

    def apply(self, patch: UserPatch) -> None:
        if "username" in patch:
            self._username = Username(value=patch["username"])
        if "password_hash" in patch:
            self._password_hash = patch["password_hash"]
        if "role" in patch:
            self._role = _to_role(patch["role"])
        if "full_name" in patch:
            self._full_name = _validate_full_name(patch["full_name"])
        if "roles" in patch:
            self._roles = tuple(patch["roles"])
