from abc import abstractmethod
from dataclasses import dataclass

from services.shared.domain import Repository
from services.user.domain.entity import User
from services.user.domain.enum import Role
from services.user.domain.value_object import UserId, Username


@dataclass(frozen=True)
class UserCriteria:
    role: Role | None = None


class UserRepository(Repository[User, UserId, UserCriteria]):
    """利用者レポジトリのインターフェース"""

    @abstractmethod
    def add(self, user: User) -> None:
        """利用者を登録する（ログイン名の重複は DuplicateResourceException）"""
        raise NotImplementedError

    @abstractmethod
    def update(self, user: User, previous_username: Username) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, user: User) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_username(self, username: Username) -> User | None:
        raise NotImplementedError
