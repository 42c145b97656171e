class StockflowException(Exception):
    """Base for failures the API layer knows how to report."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StockflowException):
    """Required input is missing or cannot be parsed."""

    status_code = 400


class ConflictError(StockflowException):
    """A unique key (the product SKU) is already taken."""

    status_code = 409


class InternalError(StockflowException):
    """
    Persistence, transaction or locking failure. The message is safe to show
    to clients; the underlying cause is logged, never returned.
    """

    status_code = 500
