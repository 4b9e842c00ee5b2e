"""Domain-specific exceptions: framework-independent."""


class ValidationError(Exception):
    """Raised when caller input is malformed or out of range."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class AuthError(Exception):
    """Base class for authentication and authorization failures."""


class UnauthenticatedError(AuthError):
    """Raised when an action requires a valid session and none is present."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(AuthError):
    """Raised when a valid session lacks the role or ownership for an action."""

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason
        super().__init__(message or f"Forbidden: {reason}")


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when a write would violate a uniqueness or reference constraint."""

    def __init__(self, entity_type: str, field: str, value: str, message: str | None = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(message or f"{entity_type} with {field}='{value}' already exists")


class StoreError(Exception):
    """Raised when the content store is unreachable or fails unexpectedly."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Content store failure during {operation}{detail}")


class ImageHostingError(Exception):
    """Raised when the image hosting service returns an error."""

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")
