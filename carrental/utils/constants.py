# carrental/utils/constants.py

"""
Global constants for roles, car categories and booking rejections.
These constants are imported by models, services and controllers.
"""

from enum import Enum

# Date format (used for rental start/end and date of birth)
DATE_FMT = "%Y-%m-%d"

MIN_CAR_YEAR = 1900

# Business timezone used for "today" unless TIMEZONE says otherwise
DEFAULT_TIMEZONE = "Europe/Rome"


class Role:
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"

    ALL = (ADMIN, CUSTOMER)


class CarCategory(str, Enum):
    AUTOMOBILE = "Automobile"
    COMMERCIALE = "Commerciale"
    CAMPER = "Camper"


class Rejection(Enum):
    """
    Outcome of a refused booking. Each member carries the error kind exposed
    to API clients, the HTTP status it maps to and a stable message.
    """

    PAST_START_DATE = ("PastStartDate", 400, "Start date cannot be in the past")
    INVALID_DATE_RANGE = ("InvalidDateRange", 400, "End date must be after start date")
    FORBIDDEN = ("Forbidden", 403, "You can only create rentals for yourself")
    CUSTOMER_NOT_FOUND = ("NotFound", 404, "Customer not found")
    CAR_NOT_FOUND = ("NotFound", 404, "Car not found")
    CAR_UNAVAILABLE = ("CarUnavailable", 400, "Car is not available during the selected period")
    ACTIVE_RENTAL_EXISTS = ("ActiveRentalExists", 400, "Customer already has an active rental")

    def __init__(self, kind: str, status: int, message: str) -> None:
        self.kind = kind
        self.status = status
        self.message = message


# --- Sample data ---
SAMPLE_CARS = (
    {"license_plate": "ABC-123", "brand": "Toyota", "model": "Camry", "year": 2022,
     "category": CarCategory.AUTOMOBILE.value},
    {"license_plate": "DEF-456", "brand": "Honda", "model": "CR-V", "year": 2023,
     "category": CarCategory.AUTOMOBILE.value},
    {"license_plate": "GHI-789", "brand": "BMW", "model": "X3", "year": 2022,
     "category": CarCategory.AUTOMOBILE.value},
    {"license_plate": "JKL-012", "brand": "Mercedes", "model": "C-Class", "year": 2023,
     "category": CarCategory.AUTOMOBILE.value},
)
DEFAULT_ADMIN = {
    "username": "admin",
    "password": "admin123",
    "first_name": "Admin",
    "last_name": "User",
    "date_of_birth": "1990-01-01",
}
