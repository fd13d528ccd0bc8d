from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from functools import reduce
from operator import and_
from typing import Any

import boto3
from boto3.dynamodb.conditions import ConditionBase, Key
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from services.shared.config import Settings
from services.shared.domain import DomainException, OptimisticLockException

METADATA = "METADATA"
GSI1 = "GSI1"

ErrorFactory = Callable[[], DomainException]


class StorageException(Exception):
    """永続化層で想定外のエラーが発生した場合"""

    pass


def all_of(conditions: Iterable[ConditionBase | None]) -> ConditionBase | None:
    """None を除いた条件を AND で結合する（条件がなければ None）"""
    present = [condition for condition in conditions if condition is not None]
    if not present:
        return None
    return reduce(and_, present)


def client_config(settings: Settings) -> Config:
    """タイムアウト付き・自動リトライなしのクライアント設定"""
    return Config(
        connect_timeout=settings.dynamodb_connect_timeout,
        read_timeout=settings.dynamodb_read_timeout,
        retries={"max_attempts": settings.dynamodb_max_attempts, "mode": "standard"},
    )


class DynamoDBStore:
    """単一テーブル設計の DynamoDB への接続ハンドル

    リポジトリはこのハンドルをコンストラクタで受け取る。
    """

    def __init__(
        self,
        table_name: str | None = None,
        resource: Any = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings.from_env()
        self.table_name = table_name or settings.table_name
        self.dynamodb = resource or boto3.resource(
            "dynamodb", config=client_config(settings)
        )
        self.table = self.dynamodb.Table(self.table_name)

    @property
    def client(self) -> Any:
        return self.dynamodb.meta.client

    def get(self, pk: str, sk: str = METADATA) -> dict | None:
        """強い整合性でアイテムを1件取得する"""
        try:
            response = self.table.get_item(
                Key={"PK": pk, "SK": sk},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageException(f"Failed to read item: {pk}") from e
        return response.get("Item")

    def query_partition(self, pk: str, sk_prefix: str) -> list[dict]:
        """パーティション内の sk_prefix で始まるアイテムを強い整合性で全件取得する"""
        return list(
            self._paginate(
                KeyConditionExpression=Key("PK").eq(pk)
                & Key("SK").begins_with(sk_prefix),
                ConsistentRead=True,
            )
        )

    def query_index(
        self,
        key_condition: ConditionBase,
        filter_expression: ConditionBase | None = None,
    ) -> Iterator[dict]:
        """GSI1 を sort key 順に遅延で読み進める"""
        kwargs: dict = {"IndexName": GSI1, "KeyConditionExpression": key_condition}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression
        return self._paginate(**kwargs)

    def transaction(self) -> Transaction:
        return Transaction(self.client, self.table_name)

    def _paginate(self, **kwargs: Any) -> Iterator[dict]:
        while True:
            try:
                response = self.table.query(**kwargs)
            except (ClientError, BotoCoreError) as e:
                raise StorageException("Failed to query items") from e
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key


class Transaction:
    """TransactWriteItems を組み立てて一括でコミットする

    各操作には条件失敗時に送出するドメイン例外を対応付けられる。
    コミットは全件成功か全件失敗のどちらかになる。
    """

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table_name = table_name
        self._items: list[dict] = []
        self._error_factories: list[ErrorFactory | None] = []

    def __len__(self) -> int:
        return len(self._items)

    def put(
        self,
        item: dict,
        condition: str | None = None,
        values: dict | None = None,
        names: dict | None = None,
        on_failure: ErrorFactory | None = None,
    ) -> Transaction:
        operation: dict = {"TableName": self._table_name, "Item": item}
        return self._append("Put", operation, condition, values, names, on_failure)

    def update(
        self,
        key: dict,
        update_expression: str,
        condition: str | None = None,
        values: dict | None = None,
        names: dict | None = None,
        on_failure: ErrorFactory | None = None,
    ) -> Transaction:
        operation: dict = {
            "TableName": self._table_name,
            "Key": key,
            "UpdateExpression": update_expression,
        }
        return self._append("Update", operation, condition, values, names, on_failure)

    def delete(
        self,
        key: dict,
        condition: str | None = None,
        values: dict | None = None,
        names: dict | None = None,
        on_failure: ErrorFactory | None = None,
    ) -> Transaction:
        operation: dict = {"TableName": self._table_name, "Key": key}
        return self._append("Delete", operation, condition, values, names, on_failure)

    def condition_check(
        self,
        key: dict,
        condition: str,
        values: dict | None = None,
        names: dict | None = None,
        on_failure: ErrorFactory | None = None,
    ) -> Transaction:
        operation: dict = {"TableName": self._table_name, "Key": key}
        return self._append(
            "ConditionCheck", operation, condition, values, names, on_failure
        )

    def commit(self) -> None:
        """組み立てた操作をアトミックに書き込む"""
        if not self._items:
            return
        try:
            self._client.transact_write_items(TransactItems=self._items)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code == "TransactionCanceledException":
                raise self._translate_cancellation(e) from e
            raise StorageException(f"DynamoDB transaction failed: {code}") from e
        except BotoCoreError as e:
            raise StorageException("DynamoDB transaction failed") from e

    def _append(
        self,
        kind: str,
        operation: dict,
        condition: str | None,
        values: dict | None,
        names: dict | None,
        on_failure: ErrorFactory | None,
    ) -> Transaction:
        if condition:
            operation["ConditionExpression"] = condition
        if values:
            operation["ExpressionAttributeValues"] = values
        if names:
            operation["ExpressionAttributeNames"] = names
        self._items.append({kind: operation})
        self._error_factories.append(on_failure)
        return self

    def _translate_cancellation(self, error: ClientError) -> Exception:
        reasons = error.response.get("CancellationReasons", [])
        for reason, on_failure in zip(reasons, self._error_factories):
            if reason.get("Code") == "ConditionalCheckFailed" and on_failure:
                return on_failure()
        if any(reason.get("Code") == "TransactionConflict" for reason in reasons):
            return OptimisticLockException(
                "The resource was modified concurrently, please retry"
            )
        codes = [reason.get("Code") for reason in reasons]
        return StorageException(f"DynamoDB transaction was cancelled: {codes}")
