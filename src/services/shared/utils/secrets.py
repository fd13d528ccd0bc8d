import boto3

_secret_cache: dict[str, str] = {}


def get_secret(secret_arn: str) -> str:
    """Secrets Manager からシークレット文字列を取得する（コンテナ内でキャッシュ）"""
    if secret_arn not in _secret_cache:
        client = boto3.client("secretsmanager")
        response = client.get_secret_value(SecretId=secret_arn)
        _secret_cache[secret_arn] = response["SecretString"]
    return _secret_cache[secret_arn]
