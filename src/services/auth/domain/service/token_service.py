from abc import ABC, abstractmethod
from dataclasses import dataclass

from services.auth.domain.value_object import Identity


@dataclass(frozen=True)
class IssuedToken:
    """発行済みのアクセストークン"""

    access_token: str
    expires_in: int
    token_type: str = "Bearer"


class TokenService(ABC):
    """署名付き・有効期限付きトークンの発行と検証"""

    @abstractmethod
    def issue(self, identity: Identity) -> IssuedToken:
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> Identity:
        """トークンを検証する（不正・期限切れは AuthenticationException）"""
        raise NotImplementedError
