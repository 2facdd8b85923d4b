class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class TicketCodeCollisionError(CustomBaseError):
    """An insert lost a race on the ticket_code unique index; retry with fresh codes."""

    def __init__(self, message: str = 'Ticket code collision') -> None:
        super().__init__(message, 503)


class TicketCodeExhaustedError(CustomBaseError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f'Could not allocate unique ticket codes after {attempts} attempts', 503)
