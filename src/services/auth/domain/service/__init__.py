from .access_policy import authorize as authorize
from .token_service import IssuedToken as IssuedToken
from .token_service import TokenService as TokenService
