from .password_hasher import PasswordHasher as PasswordHasher
