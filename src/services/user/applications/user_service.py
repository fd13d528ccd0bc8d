from __future__ import annotations

from collections.abc import Iterator
from typing import TypedDict

from aws_lambda_powertools import Logger

from services.shared.domain import (
    DuplicateResourceException,
    PageRequest,
    ResourceNotFoundException,
    ValidationException,
)
from services.user.domain import (
    PasswordHasher,
    User,
    UserCriteria,
    UserId,
    Username,
    UserPatch,
    UserRepository,
)

logger = Logger(child=True)

# bcrypt は先頭 72 バイトまでしか扱えない
PASSWORD_MAX_BYTES = 72


class UserDetails(TypedDict):
    """利用者登録の入力データ構造"""

    username: str
    password: str
    role: str
    full_name: str
    roles: list[str]


class UserChanges(TypedDict, total=False):
    """利用者更新の入力データ構造（password は平文で受け取りハッシュ化する）"""

    username: str
    password: str
    role: str
    full_name: str
    roles: list[str]


def _ensure_password(password: str) -> None:
    if not password:
        raise ValidationException("Password cannot be empty")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationException(
            f"Password is too long (max {PASSWORD_MAX_BYTES} bytes)"
        )


class UserService:
    """利用者管理のユースケース"""

    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self._repository = repository
        self._hasher = hasher

    def create(self, details: UserDetails) -> User:
        username = Username(value=details["username"])
        _ensure_password(details["password"])
        if self._repository.find_by_username(username) is not None:
            logger.warning("Username already exists", extra={"username": str(username)})
            raise DuplicateResourceException(f"Username already exists: {username}")

        user = User(
            id=UserId.generate(),
            username=username,
            password_hash=self._hasher.hash(details["password"]),
            role=details["role"],
            full_name=details["full_name"],
            roles=details.get("roles") or (),
        )
        self._repository.add(user)
        logger.info(
            "User created",
            extra={"user_id": str(user.id), "role": user.role.value},
        )
        return user

    def get_by_id(self, user_id: UserId) -> User:
        user = self._repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException(f"User not found: {user_id}")
        return user

    def update(self, user_id: UserId, changes: UserChanges) -> User:
        """利用者を更新する（新しいパスワードは再ハッシュする）"""
        user = self.get_by_id(user_id)
        previous_username = user.username

        patch = UserPatch(
            **{key: value for key, value in changes.items() if key != "password"}
        )
        if "password" in changes:
            _ensure_password(changes["password"])
            patch["password_hash"] = self._hasher.hash(changes["password"])
        user.apply(patch)

        if user.username != previous_username:
            existing = self._repository.find_by_username(user.username)
            if existing is not None and existing.id != user.id:
                logger.warning(
                    "Username already exists",
                    extra={"username": str(user.username)},
                )
                raise DuplicateResourceException(
                    f"Username already exists: {user.username}"
                )

        self._repository.update(user, previous_username=previous_username)
        logger.info("User updated", extra={"user_id": str(user.id)})
        return user

    def delete(self, user_id: UserId) -> User:
        """利用者を削除する（予約は連鎖削除しない）"""
        user = self.get_by_id(user_id)
        self._repository.remove(user)
        logger.info("User deleted", extra={"user_id": str(user.id)})
        return user

    def list(self, criteria: UserCriteria, page: PageRequest) -> Iterator[User]:
        return self._repository.find_all(criteria, page)
