from enum import Enum


class Capability(str, Enum):
    """操作に必要な権限レベル"""

    USER = "user"
    ADMIN = "admin"
