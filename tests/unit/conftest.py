import json
import os
from dataclasses import dataclass

import pytest

# ハンドラモジュールは import 時に boto3 リソースを生成するため先に設定する
os.environ.setdefault("TABLE_NAME", "hotel-back-office-test")
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "hotel-back-office")
os.environ.setdefault("TOKEN_SECRET", "test-signing-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")


@dataclass
class FakeLambdaContext:
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:ap-northeast-1:123456789012:function:test-function"
    )
    aws_request_id: str = "test-request-id"


@pytest.fixture
def lambda_context():
    return FakeLambdaContext()




@pytest.fixture
def api_event():
    """API Gateway REST (Lambda プロキシ統合) のイベントを生成する Factory fixture"""

    def _factory(
        method: str = "GET",
        path: str = "/",
        body: dict | None = None,
        query: dict | None = None,
        claims: dict | None = None,
    ) -> dict:
        return {
            "resource": path,
            "path": path,
            "httpMethod": method,
            "headers": {"Content-Type": "application/json"},
            "multiValueHeaders": {"Content-Type": ["application/json"]},
            "queryStringParameters": query,
            "multiValueQueryStringParameters": (
                {key: [value] for key, value in query.items()} if query else None
            ),
            "pathParameters": None,
            "stageVariables": None,
            "requestContext": {
                "accountId": "123456789012",
                "apiId": "api-id",
                "authorizer": claims or {},
                "httpMethod": method,
                "path": f"/prod{path}",
                "requestId": "request-id",
                "resourcePath": path,
                "stage": "prod",
            },
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
        }

    return _factory
