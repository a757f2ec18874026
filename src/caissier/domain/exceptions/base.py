"""
Base domain exceptions.
"""


class CaissierException(Exception):
    """Base exception for all Caissier domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(CaissierException):
    """Raised when entity is not found."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            code="ENTITY_NOT_FOUND",
        )


class DuplicateEntityError(CaissierException):
    """Raised when a unique field already holds the given value."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(
            f"{entity_type} with {field} '{value}' already exists",
            code="DUPLICATE_ENTITY",
        )


class ValidationError(CaissierException):
    """Raised when input fails local validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"Validation failed for {field}: {reason}",
            code="VALIDATION_ERROR",
        )
