"""Domain error kinds shared by services and the HTTP boundary."""


class AppError(Exception):
    """Base class for application errors. Catch this to handle any domain error uniformly."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(AppError):
    """Login rejected. Deliberately does not say whether the user exists."""

    def __init__(self, message: str = "Invalid username or password.") -> None:
        super().__init__(message)


class TokenInvalidError(AppError):
    """Bearer token missing, malformed, badly signed, for another issuer/audience, or expired."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class UnauthorizedError(AppError):
    """Generic access rejection (e.g. wrong current password)."""


class PermissionDeniedError(AppError):
    """Authenticated principal lacks the required permission."""

    def __init__(self, permission: object | None = None) -> None:
        self.permission = permission
        if permission is None:
            message = "Permission denied."
        else:
            message = f"Permission denied: {getattr(permission, 'name', permission)}."
        super().__init__(message)


class EntityNotFoundError(AppError):
    """A requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' was not found.")


class DuplicateEntityError(AppError):
    """A uniqueness constraint (username, email) would be violated."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"A record with {field} '{value}' already exists.")


class SystemEntityProtectedError(AppError):
    """Attempt to modify or delete a system-protected entity (the seeded admin)."""

    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        super().__init__(f"{entity_type} is a system entity and cannot be modified or deleted.")
