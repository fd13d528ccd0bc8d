from collections.abc import Iterator

from boto3.dynamodb.conditions import Attr, Key

from services.shared.domain import (
    DuplicateResourceException,
    OptimisticLockException,
    PageRequest,
)
from services.shared.infrastructure import METADATA, DynamoDBStore
from services.user.domain import (
    User,
    UserCriteria,
    UserId,
    Username,
    UserRepository,
)

_UNIQUE = "UNIQUE"
_VERSION_MATCHES = "#version = :expected"
_VERSION_NAMES = {"#version": "version"}


def user_pk(user_id: UserId) -> str:
    return f"USER#{user_id}"


def _username_guard_key(username: Username) -> dict:
    return {"PK": f"USERNAME#{username}", "SK": _UNIQUE}


class DynamoDBUserRepository(UserRepository):
    """DynamoDBを使用したUserRepository の具象実装

    ログイン名の一意性は USERNAME# のガードアイテムで担保し、
    ログイン時の検索にも同じアイテムを使う。
    """

    def __init__(self, store: DynamoDBStore) -> None:
        self._store = store

    def add(self, user: User) -> None:
        tx = self._store.transaction()
        tx.put(
            self._to_item(user, version=0),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"User already exists: {user.id}"
            ),
        )
        tx.put(
            self._username_guard(user),
            condition="attribute_not_exists(PK)",
            on_failure=lambda: DuplicateResourceException(
                f"Username already exists: {user.username}"
            ),
        )
        tx.commit()

    def update(self, user: User, previous_username: Username) -> None:
        tx = self._store.transaction()
        tx.put(
            self._to_item(user, version=user.version + 1),
            condition=_VERSION_MATCHES,
            names=_VERSION_NAMES,
            values={":expected": user.version},
            on_failure=lambda: OptimisticLockException(
                f"User was modified concurrently: {user.id}"
            ),
        )
        if user.username != previous_username:
            tx.delete(_username_guard_key(previous_username))
            tx.put(
                self._username_guard(user),
                condition="attribute_not_exists(PK)",
                on_failure=lambda: DuplicateResourceException(
                    f"Username already exists: {user.username}"
                ),
            )
        tx.commit()

    def remove(self, user: User) -> None:
        tx = self._store.transaction()
        tx.delete(
            {"PK": user_pk(user.id), "SK": METADATA},
            condition=_VERSION_MATCHES,
            names=_VERSION_NAMES,
            values={":expected": user.version},
            on_failure=lambda: OptimisticLockException(
                f"User was modified concurrently: {user.id}"
            ),
        )
        tx.delete(_username_guard_key(user.username))
        tx.commit()

    def find_by_id(self, user_id: UserId) -> User | None:
        item = self._store.get(user_pk(user_id))
        if not item:
            return None
        return self._to_entity(item)

    def find_by_username(self, username: Username) -> User | None:
        guard = self._store.get(f"USERNAME#{username}", _UNIQUE)
        if not guard:
            return None
        return self.find_by_id(UserId(value=guard["user_id"]))

    def find_all(self, criteria: UserCriteria, page: PageRequest) -> Iterator[User]:
        items = self._store.query_index(
            Key("GSI1PK").eq("USERS"),
            Attr("role").eq(criteria.role.value) if criteria.role else None,
        )
        return page.slice(self._to_entity(item) for item in items)

    def _to_item(self, user: User, version: int) -> dict:
        return {
            "PK": user_pk(user.id),
            "SK": METADATA,
            "entity_type": "USER",
            "user_id": str(user.id),
            "username": str(user.username),
            "password_hash": user.password_hash,
            "role": user.role.value,
            "full_name": user.full_name,
            "roles": list(user.roles),
            "version": version,
            "GSI1PK": "USERS",
            "GSI1SK": f"USER#{user.id}",
        }

    def _username_guard(self, user: User) -> dict:
        return {
            **_username_guard_key(user.username),
            "entity_type": "USERNAME",
            "user_id": str(user.id),
        }

    def _to_entity(self, item: dict) -> User:
        return User(
            id=UserId(value=item["user_id"]),
            username=Username(value=item["username"]),
            password_hash=item["password_hash"],
            role=item["role"],
            full_name=item["full_name"],
            roles=item.get("roles") or (),
            version=int(item.get("version", 0)),
        )
