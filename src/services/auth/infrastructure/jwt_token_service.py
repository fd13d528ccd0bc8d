from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from services.auth.domain import Identity, IssuedToken, TokenService
from services.shared.config import Settings
from services.shared.domain import AuthenticationException
from services.shared.utils.secrets import get_secret


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenService(TokenService):
    """HS256 で署名した JWT を扱う TokenService の具象実装

    クレーム: id / username / role / iat / exp
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret is not configured")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def issue(self, identity: Identity) -> IssuedToken:
        issued_at = self._clock()
        expires_at = issued_at + timedelta(seconds=self._ttl_seconds)
        claims = {
            "id": identity.user_id,
            "username": identity.username,
            "role": identity.role,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=self.ALGORITHM)
        return IssuedToken(access_token=token, expires_in=self._ttl_seconds)

    def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.ALGORITHM])
        except ExpiredSignatureError as e:
            raise AuthenticationException("Token has expired") from e
        except JWTError as e:
            raise AuthenticationException("Invalid token") from e

        try:
            return Identity(
                user_id=str(claims["id"]),
                username=str(claims["username"]),
                role=str(claims["role"]),
            )
        except KeyError as e:
            raise AuthenticationException(f"Token is missing claim: {e}") from e

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtTokenService":
        """環境変数の設定から生成する（TOKEN_SECRET があれば優先）"""
        secret = settings.token_secret
        if not secret and settings.token_secret_arn:
            secret = get_secret(settings.token_secret_arn)
        return cls(secret=secret or "", ttl_seconds=settings.token_ttl_seconds)
