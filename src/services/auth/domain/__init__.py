from .enum import Capability as Capability
from .service import IssuedToken as IssuedToken
from .service import TokenService as TokenService
from .service import authorize as authorize
from .value_object import Identity as Identity
