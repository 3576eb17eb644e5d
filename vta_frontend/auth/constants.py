"""Constants used across the authentication package."""

USER_TOKEN_PATH = "/auth/token"
ADMIN_TOKEN_PATH = "/auth/admin/token"
REGISTER_PATH = "/auth/register"
DEFAULT_REGISTER_ROLE = "user"

AUTHENTICATION_FAILED = "Authentication failed"
REGISTRATION_FAILED = "Registration failed"
MISSING_ACCESS_TOKEN = "No access token received"
ADMIN_LOGIN_FAILED = "Invalid credentials or not an admin"

__all__ = [
    "USER_TOKEN_PATH",
    "ADMIN_TOKEN_PATH",
    "REGISTER_PATH",
    "DEFAULT_REGISTER_ROLE",
    "AUTHENTICATION_FAILED",
    "REGISTRATION_FAILED",
    "MISSING_ACCESS_TOKEN",
    "ADMIN_LOGIN_FAILED",
]
