from services.auth.domain.enum import Capability
from services.auth.domain.value_object import Identity
from services.shared.domain import AuthenticationException, AuthorizationException


def authorize(identity: Identity | None, capability: Capability) -> None:
    """identity が capability を満たすか判定する

    - USER: 認証済みであれば誰でも可
    - ADMIN: role が admin の場合のみ可
    """
    if identity is None:
        raise AuthenticationException("Authentication required")
    if capability is Capability.ADMIN and not identity.is_admin:
        raise AuthorizationException(
            f"Admin role required (user={identity.username}, role={identity.role})"
        )
