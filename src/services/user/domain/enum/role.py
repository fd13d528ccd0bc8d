from enum import Enum


class Role(str, Enum):
    """利用者ロール"""

    ADMIN = "admin"
    USER = "user"
