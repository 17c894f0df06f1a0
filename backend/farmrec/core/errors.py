# backend/farmrec/core/errors.py


class FarmRecError(Exception):
    """Base class for errors raised by the farmrec services."""


class InvalidCredentialsError(FarmRecError):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class PermissionDeniedError(FarmRecError):
    def __init__(self, role: str, permission: str):
        self.role = role
        self.permission = permission
        super().__init__(f"Permission denied: role '{role}' is missing '{permission}'")


class DuplicateUsernameError(FarmRecError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' is already taken")


class AuthProviderError(FarmRecError):
    """Supabase Auth answered with a non-success status."""

    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Auth provider returned {status_code}")
