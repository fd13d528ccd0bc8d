from .exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleViolationException,
    ConflictException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    OverlappingReservationException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "DomainException",
    "ValidationException",
    "ResourceNotFoundException",
    "ConflictException",
    "DuplicateResourceException",
    "OverlappingReservationException",
    "OptimisticLockException",
    "BusinessRuleViolationException",
    "AuthenticationException",
    "AuthorizationException",
]
