# Exceptions raised by the service layer


class DataAccessError(Exception):
    """Base class for rejected data-access operations."""


class ConstraintViolationError(DataAccessError):
    """A unique column already holds the given value."""

    def __init__(self, field, value=None):
        self.field = field
        self.value = value
        super().__init__(f'Unique constraint failed on the field: {field}')


class RecordNotFoundError(DataAccessError):
    """A lookup or relation connection did not match any row."""

    def __init__(self, model, key):
        self.model = model
        self.key = key
        super().__init__(f'{model} with {key} not found')


class ValidationError(DataAccessError):
    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f'{field}: {message}')
