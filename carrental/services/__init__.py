from .auth_service import AuthService
from .car_service import CarService
from .customer_service import CustomerService
from .rental_service import RentalService
from .seed_service import SeedService

__all__ = [
    "AuthService",
    "CarService",
    "CustomerService",
    "RentalService",
    "SeedService",
]
