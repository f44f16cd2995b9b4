import logging

from carrental.models.store import Store
from carrental.utils.constants import DEFAULT_ADMIN, SAMPLE_CARS, Role
from carrental.utils.dates import parse_date
from carrental.utils.security import generate_hash

logger = logging.getLogger(__name__)


class SeedService:
    """Default admin account and demo cars."""

    @staticmethod
    def ensure_admin(store: Store) -> dict:
        """
        Ensure the default admin exists.
        - If it exists: leave it untouched (password may have been changed).
        - If not: create it with the ADMIN role.
        """
        existing = store.find_customer_by_username(DEFAULT_ADMIN["username"])
        if existing:
            return existing
        admin_role = store.find_role_by_name(Role.ADMIN)
        admin = store.create_customer({
            "username": DEFAULT_ADMIN["username"],
            "password_hash": generate_hash(DEFAULT_ADMIN["password"]),
            "first_name": DEFAULT_ADMIN["first_name"],
            "last_name": DEFAULT_ADMIN["last_name"],
            "date_of_birth": parse_date(DEFAULT_ADMIN["date_of_birth"]),
            "role_id": admin_role["id"],
        })
        logger.info("Default admin user created")
        return admin

    @staticmethod
    def ensure_sample_cars(store: Store) -> int:
        """Create the demo cars only if there are no cars at all."""
        if store.cars:
            return 0
        for car in SAMPLE_CARS:
            store.create_car(car)
        logger.info("Sample cars created")
        return len(SAMPLE_CARS)

    @staticmethod
    def ensure_defaults(store: Store) -> None:
        with store.transaction():
            SeedService.ensure_admin(store)
            SeedService.ensure_sample_cars(store)
