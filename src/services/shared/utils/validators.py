import json
from decimal import Decimal

from aws_lambda_powertools.utilities.data_classes.common import BaseProxyEvent

from services.shared.domain import ValidationException


def to_decimal(v: object) -> object:
    """任意の値を Decimal に変換する

    Pydantic の field_validator (mode="before") から呼び出すことを想定。
    None とすでに Decimal の場合はそのまま返し、それ以外は str 経由で変換する。
    変換できない値はそのまま返し、Pydantic の検証エラーに任せる。
    """
    if v is None or isinstance(v, Decimal):
        return v
    if isinstance(v, bool):
        return v
    try:
        return Decimal(str(v))
    except ArithmeticError:
        return v


def parse_json_body(event: BaseProxyEvent) -> dict:
    """リクエストボディを JSON オブジェクトとして読み込む"""
    if not event.body:
        return {}
    try:
        body = json.loads(event.decoded_body)
    except ValueError as e:
        raise ValidationException("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise ValidationException("Request body must be a JSON object")
    return body
