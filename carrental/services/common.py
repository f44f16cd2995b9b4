"""Shared service helpers: store access, 'today', overlap and JSON mappers."""

from datetime import date
from typing import Optional

from flask import current_app

from carrental.models.store import Store
from carrental.utils.dates import fmt_date, today_in

STORE_KEY = "carrental.store"


def _store() -> Store:
    """Get the store bound to the running application."""
    return current_app.extensions[STORE_KEY]


def _today() -> date:
    """Today in the configured business timezone; wrapper for easier testing."""
    return today_in(current_app.config["SETTINGS"].timezone)


def overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """
    Check overlap between the closed ranges [a_start, a_end] and [b_start, b_end].
    Both ends are booked days, so a rental ending on day X collides with one starting on X.
    """
    return a_start <= b_end and b_start <= a_end


# -------- record -> JSON mappers --------
def role_to_json(r: Optional[dict]) -> Optional[dict]:
    if not r:
        return None
    return {"id": r["id"], "roleName": r["role_name"]}


def customer_summary(c: Optional[dict]) -> Optional[dict]:
    """Short customer view embedded in rentals."""
    if not c:
        return None
    return {
        "id": c["id"],
        "firstName": c["first_name"],
        "lastName": c["last_name"],
        "username": c["username"],
    }


def customer_to_json(c: dict, store: Store) -> dict:
    """Full customer view; the password hash never leaves the store."""
    out = customer_summary(c)
    out.update({
        "dateOfBirth": fmt_date(c["date_of_birth"]),
        "enabled": c["enabled"],
        "roleId": c["role_id"],
        "role": role_to_json(store.find_role(c["role_id"])),
        "createdAt": c.get("created_at"),
        "updatedAt": c.get("updated_at"),
    })
    return out


def car_summary(car: Optional[dict]) -> Optional[dict]:
    if not car:
        return None
    return {
        "id": car["id"],
        "licensePlate": car["license_plate"],
        "brand": car["brand"],
        "model": car["model"],
        "year": car["year"],
        "category": car["category"],
    }


def car_to_json(car: dict) -> dict:
    out = car_summary(car)
    out.update({"createdAt": car.get("created_at"), "updatedAt": car.get("updated_at")})
    return out


def rental_to_json(r: dict, store: Store) -> dict:
    """Rental with the joined customer and car summaries."""
    return {
        "id": r["id"],
        "startDate": fmt_date(r["start_date"]),
        "endDate": fmt_date(r["end_date"]),
        "customerId": r["customer_id"],
        "carId": r["car_id"],
        "createdAt": r.get("created_at"),
        "updatedAt": r.get("updated_at"),
        "referredCustomer": customer_summary(store.find_customer(r["customer_id"])),
        "rentedCar": car_summary(store.find_car(r["car_id"])),
    }
