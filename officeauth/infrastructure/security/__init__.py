"""Security: session JWTs and password hashing."""

from officeauth.infrastructure.security.jwt import create_access_token, verify_token
from officeauth.infrastructure.security.password import (
    BcryptPasswordHasher,
    get_password_hash,
    verify_password,
)

__all__ = [
    "BcryptPasswordHasher",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
