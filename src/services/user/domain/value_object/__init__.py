from .user_id import UserId as UserId
from .username import Username as Username
