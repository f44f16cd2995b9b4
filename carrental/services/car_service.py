from __future__ import annotations

import logging
from typing import Optional

from carrental.exceptions import CarNotFoundError
from carrental.models.schemas import CarCreate, CarUpdate
from carrental.models.store import Store
from carrental.services import common
from carrental.utils.dates import fmt_date

logger = logging.getLogger(__name__)


class CarService:
    """Car catalogue: list, availability, create, update, delete."""

    @staticmethod
    def list_cars(store: Optional[Store] = None) -> list[dict]:
        """All cars ordered by brand, then model."""
        st = store or common._store()
        return sorted(st.list_cars(), key=lambda c: (c["brand"].lower(), c["model"].lower(), c["id"]))

    @staticmethod
    def get_car(car_id: int, store: Optional[Store] = None) -> dict:
        """Return a car dict by id or raise CarNotFoundError."""
        st = store or common._store()
        car = st.find_car(car_id)
        if car is None:
            raise CarNotFoundError()
        return car

    @staticmethod
    def availability_calendar(car_id: int, store: Optional[Store] = None) -> list[dict]:
        """
        Booked [startDate, endDate] ranges of a car, sorted by start.
        Used by the booking form to disable taken dates.
        """
        st = store or common._store()
        CarService.get_car(car_id, store=st)
        ranges = sorted(st.find_rentals_for_car(car_id), key=lambda r: r["start_date"])
        return [{"startDate": fmt_date(r["start_date"]), "endDate": fmt_date(r["end_date"])} for r in ranges]

    @staticmethod
    def create_car(payload: CarCreate, store: Optional[Store] = None) -> dict:
        st = store or common._store()
        data = payload.model_dump()
        data["category"] = payload.category.value
        car = st.create_car(data)
        logger.info("Car %s created (%s)", car["id"], car["license_plate"])
        return car

    @staticmethod
    def update_car(car_id: int, changes: CarUpdate, store: Optional[Store] = None) -> dict:
        st = store or common._store()
        updates = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "category" in updates:
            updates["category"] = changes.category.value
        car = st.update_car(car_id, updates)
        if car is None:
            raise CarNotFoundError()
        return car

    @staticmethod
    def delete_car(car_id: int, store: Optional[Store] = None) -> None:
        """
        Delete a car if it exists and no rental references it.
        RecordInUseError propagates from the store when rentals exist.
        """
        st = store or common._store()
        if not st.delete_car(car_id):
            raise CarNotFoundError()
        logger.info("Car %s deleted", car_id)
