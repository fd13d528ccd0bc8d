from pydantic import BaseModel, Field

from services.user.domain import User


class UserData(BaseModel):
    """利用者データのレスポンスモデル（パスワードハッシュは含めない）"""

    id: str
    username: str
    role: str
    full_name: str = Field(serialization_alias="fullName")
    roles: list[str]


def to_data(user: User) -> dict:
    return UserData(
        id=str(user.id),
        username=str(user.username),
        role=user.role.value,
        full_name=user.full_name,
        roles=list(user.roles),
    ).model_dump(mode="json", by_alias=True)
