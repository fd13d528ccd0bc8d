from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """環境変数から読み込むアプリケーション設定

    Lambda の環境変数は CDK の Functions Construct で設定する。
    """

    table_name: str
    token_secret_arn: str | None = None
    token_secret: str | None = None
    token_ttl_seconds: int = 3600
    bcrypt_rounds: int = 12
    dynamodb_connect_timeout: float = 2.0
    dynamodb_read_timeout: float = 5.0
    dynamodb_max_attempts: int = 1

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("TABLE_NAME", ""),
            token_secret_arn=env.get("TOKEN_SECRET_ARN") or None,
            token_secret=env.get("TOKEN_SECRET") or None,
            token_ttl_seconds=int(env.get("TOKEN_TTL_SECONDS", "3600")),
            bcrypt_rounds=int(env.get("BCRYPT_ROUNDS", "12")),
            dynamodb_connect_timeout=float(env.get("DYNAMODB_CONNECT_TIMEOUT", "2")),
            dynamodb_read_timeout=float(env.get("DYNAMODB_READ_TIMEOUT", "5")),
            dynamodb_max_attempts=int(env.get("DYNAMODB_MAX_ATTEMPTS", "1")),
        )
