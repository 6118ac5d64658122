class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidInputError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidSeatFormatError(InvalidInputError):
    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f'Invalid seat format: {label}')


class SeatOutOfLayoutError(InvalidInputError):
    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f'Seat {label} does not exist in this screen layout')


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class PolicyViolationError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 403) -> None:
        super().__init__(message, status_code)


class GoneError(PolicyViolationError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 410)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatConflictError(ConflictError):
    def __init__(self, labels: list[str]) -> None:
        self.labels = labels
        super().__init__(f'Seats already booked or held: {", ".join(labels)}')


class PricingMissingError(CustomBaseError):
    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f'Pricing not found for category: {category}', 500)


class InternalError(CustomBaseError):
    def __init__(self, message: str = 'Internal server error') -> None:
        super().__init__(message, 500)
