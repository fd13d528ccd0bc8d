from .entity import User as User
from .entity import UserPatch as UserPatch
from .enum import Role as Role
from .repository import UserCriteria as UserCriteria
from .repository import UserRepository as UserRepository
from .service import PasswordHasher as PasswordHasher
from .value_object import UserId as UserId
from .value_object import Username as Username
