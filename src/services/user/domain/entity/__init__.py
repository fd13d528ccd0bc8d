from .user import User as User
from .user import UserPatch as UserPatch
