from unittest.mock import MagicMock

import pytest

from services.user.domain import Role, User, UserId, Username


@pytest.fixture
def create_user():
    """User を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        user_id: str = "user-1",
        username: str = "alice",
        password_hash: str = "hashed:secret",
        role: Role = Role.USER,
        full_name: str = "Alice Liddell",
        roles: tuple[str, ...] = (),
        version: int = 0,
    ) -> User:
        return User(
            id=UserId(value=user_id),
            username=Username(value=username),
            password_hash=password_hash,
            role=role,
            full_name=full_name,
            roles=roles,
            version=version,
        )

    return _factory


@pytest.fixture
def fake_hasher():
    """"hashed:" を前置するだけのハッシュ関数"""
    hasher = MagicMock()
    hasher.hash.side_effect = lambda password: f"hashed:{password}"
    hasher.verify.side_effect = lambda password, hashed: hashed == f"hashed:{password}"
    return hasher
