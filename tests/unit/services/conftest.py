from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def mock_store():
    """DynamoDBStore のモック（transaction() は毎回同じモックを返す）"""
    store = MagicMock()
    store.transaction.return_value = MagicMock()
    return store
