import bcrypt

from services.user.domain import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt を使用した PasswordHasher の具象実装"""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            # 形式の壊れたハッシュは不一致として扱う
            return False
