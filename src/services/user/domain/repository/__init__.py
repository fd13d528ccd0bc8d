from .user_repository import UserCriteria as UserCriteria
from .user_repository import UserRepository as UserRepository
