class DomainException(Exception):
    """ドメイン層で発生する基底例外"""

    pass


class ValidationException(DomainException, ValueError):
    """入力値が不変条件を満たさない場合"""

    pass


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    pass


class ConflictException(DomainException):
    """現在の状態と競合する場合"""

    pass


class DuplicateResourceException(ConflictException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OverlappingReservationException(ConflictException):
    """同じ部屋で宿泊期間が重なる予約が既に存在する場合"""

    pass


class OptimisticLockException(ConflictException):
    """楽観ロックの競合エラー（バージョンが期待値と異なる場合）"""

    pass


class BusinessRuleViolationException(ConflictException):
    """ビジネスルールに違反した場合"""

    pass


class AuthenticationException(DomainException):
    """認証に失敗した場合"""

    pass


class AuthorizationException(DomainException):
    """権限が不足している場合"""

    pass
