"""
Custom exception classes for the car rental API.

These exceptions provide precise error types that controllers can catch
to return a proper JSON error instead of a generic 500.
Booking rejections are not exceptions: see ``utils.constants.Rejection``.
"""


class CarRentalError(Exception):
    """Base class; carries a client-safe message and the HTTP status it maps to."""

    status = 400

    def __init__(self, message: str = "Error: request failed") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class CarNotFoundError(CarRentalError):
    """Raised when a car ID cannot be found in the system."""

    status = 404

    def __init__(self, message: str = "Car not found") -> None:
        super().__init__(message)


class CustomerNotFoundError(CarRentalError):
    """Raised when a customer ID or username cannot be found in the system."""

    status = 404

    def __init__(self, message: str = "Customer not found") -> None:
        super().__init__(message)


class RentalNotFoundError(CarRentalError):
    """Raised when a rental record cannot be found in the system."""

    status = 404

    def __init__(self, message: str = "Rental not found") -> None:
        super().__init__(message)


class RoleNotFoundError(CarRentalError):
    """Raised when a role ID cannot be found in the system."""

    status = 404

    def __init__(self, message: str = "Role not found") -> None:
        super().__init__(message)


class InvalidRoleError(CarRentalError):
    """Raised when a customer is created or updated with an unknown role ID."""

    def __init__(self, message: str = "Invalid role ID") -> None:
        super().__init__(message)


class DuplicateUsernameError(CarRentalError):
    def __init__(self, message: str = "Username already exists") -> None:
        super().__init__(message)


class DuplicateLicensePlateError(CarRentalError):
    def __init__(self, message: str = "License plate already exists") -> None:
        super().__init__(message)


class RecordInUseError(CarRentalError):
    """Raised when deleting a car or customer that rentals still reference."""

    def __init__(self, message: str = "Record is referenced by existing rentals") -> None:
        super().__init__(message)


class PermissionDeniedError(CarRentalError):
    status = 403

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class InvalidDateRangeError(CarRentalError):
    """Raised when an admin rental update leaves end date on or before start date."""

    def __init__(self, message: str = "End date must be after start date") -> None:
        super().__init__(message)
