from aws_lambda_powertools import Logger

from services.auth.domain import Identity, IssuedToken, TokenService
from services.shared.domain import AuthenticationException, ValidationException
from services.user.domain import PasswordHasher, Username, UserRepository

logger = Logger(child=True)

_INVALID_CREDENTIALS = "Invalid username or password"


class LoginService:
    """ログイン名とパスワードを照合してアクセストークンを発行する

    利用者が存在しない場合もダミーのハッシュで照合し、
    クライアントにはどちらの失敗かを区別しない同じエラーを返す。
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._dummy_hash: str | None = None

    def login(self, username: str, password: str) -> IssuedToken:
        try:
            user = self._users.find_by_username(Username(value=username))
        except ValidationException:
            user = None

        if user is None:
            self._hasher.verify(password, self._get_dummy_hash())
            logger.info("Login failed: unknown username")
            raise AuthenticationException(_INVALID_CREDENTIALS)

        if not self._hasher.verify(password, user.password_hash):
            logger.info("Login failed: wrong password", extra={"user_id": str(user.id)})
            raise AuthenticationException(_INVALID_CREDENTIALS)

        token = self._tokens.issue(
            Identity(
                user_id=str(user.id),
                username=str(user.username),
                role=user.role.value,
            )
        )
        logger.info("Login succeeded", extra={"user_id": str(user.id)})
        return token

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("not-a-real-password")
        return self._dummy_hash
