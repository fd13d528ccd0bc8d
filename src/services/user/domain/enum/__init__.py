from .role import Role as Role
