"""Domain errors raised by the store and mapped to HTTP responses."""


class StockWatchError(Exception):
    """Base class for errors a client request can trigger."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StockWatchError):
    """A required field is missing or carries an unacceptable value."""

    status_code = 400


class NotFoundError(StockWatchError):
    """The referenced user does not exist."""

    status_code = 404
