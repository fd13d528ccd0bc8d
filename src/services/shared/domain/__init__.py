from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .exception import (
    AuthenticationException as AuthenticationException,
)
from .exception import (
    AuthorizationException as AuthorizationException,
)
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    ConflictException as ConflictException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    OverlappingReservationException as OverlappingReservationException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exception import (
    ValidationException as ValidationException,
)
from .repository import Repository as Repository
from .value_object import (
    Amount as Amount,
)
from .value_object import (
    PageRequest as PageRequest,
)
