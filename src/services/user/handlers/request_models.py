from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.shared.domain import PageRequest
from services.user.applications.user_service import (
    PASSWORD_MAX_BYTES,
    UserChanges,
    UserDetails,
)
from services.user.domain import Role, UserCriteria


def _check_password_bytes(v: str | None) -> str | None:
    """bcrypt は先頭 72 バイトまでしか扱えないため文字数ではなくバイト数で判定する"""
    if v is not None and len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password is too long (max {PASSWORD_MAX_BYTES} bytes)")
    return v


class CreateUserRequest(BaseModel):
    """利用者登録リクエストモデル"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=64, examples=["alice"])
    password: str = Field(..., min_length=1)
    role: Role = Role.USER
    full_name: str = Field(..., alias="fullName", min_length=1)
    roles: list[str] = Field(default_factory=list)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str | None) -> str | None:
        return _check_password_bytes(v)

    def to_details(self) -> UserDetails:
        return UserDetails(
            username=self.username,
            password=self.password,
            role=self.role.value,
            full_name=self.full_name,
            roles=self.roles,
        )


class UpdateUserRequest(BaseModel):
    """利用者更新リクエストモデル（送られた項目のみ更新）"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str | None = Field(default=None, min_length=1, max_length=64)
    password: str | None = Field(default=None, min_length=1)
    role: Role | None = None
    full_name: str | None = Field(default=None, alias="fullName", min_length=1)
    roles: list[str] | None = None

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str | None) -> str | None:
        return _check_password_bytes(v)

    def to_changes(self) -> UserChanges:
        return UserChanges(**self.model_dump(mode="json", exclude_unset=True))


class ListUsersQuery(BaseModel):
    offset: int = Field(default=0, ge=0)
    limit: int = Field(
        default=PageRequest.DEFAULT_LIMIT, ge=1, le=PageRequest.MAX_LIMIT
    )
    role: Role | None = None

    def to_criteria(self) -> UserCriteria:
        return UserCriteria(role=self.role)

    def to_page(self) -> PageRequest:
        return PageRequest(offset=self.offset, limit=self.limit)
