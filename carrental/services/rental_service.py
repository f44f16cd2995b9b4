"""Rental-related service layer utilities."""

import logging
from datetime import date
from typing import Optional

from carrental.exceptions import InvalidDateRangeError, PermissionDeniedError, RentalNotFoundError
from carrental.models.requester import Requester
from carrental.models.schemas import RentalRequest, RentalUpdate
from carrental.models.store import Store
from carrental.services import common
from carrental.services.booking import validate_booking

logger = logging.getLogger(__name__)


def _newest_first(rentals: list[dict]) -> list[dict]:
    return sorted(rentals, key=lambda r: (r["start_date"], r["id"]), reverse=True)


class RentalService:
    """Book, list, update and delete rentals."""

    @staticmethod
    def create_rental(
            req: RentalRequest,
            requester: Requester,
            store: Optional[Store] = None,
            today: Optional[date] = None,
    ):
        """
        Validate and insert a rental in one step.

        The store lock is held from the first check to the insert, so two
        concurrent requests for the same car cannot both pass the overlap check.

        Returns:
            (ok: bool, rejection: Optional[Rejection], rental: Optional[dict])
        """
        st = store or common._store()
        today = today or common._today()

        with st.transaction():
            rejection = validate_booking(req, requester, st, today)
            if rejection is not None:
                logger.info(
                    "Booking rejected (%s): car=%s customer=%s %s..%s by user %s",
                    rejection.kind, req.car_id, req.customer_id,
                    req.start_date, req.end_date, requester.id,
                )
                return False, rejection, None

            rental = st.insert_rental({
                "start_date": req.start_date,
                "end_date": req.end_date,
                "customer_id": req.customer_id,
                "car_id": req.car_id,
            })

        logger.info("Rental %s created: car=%s customer=%s %s..%s",
                    rental["id"], rental["car_id"], rental["customer_id"],
                    rental["start_date"], rental["end_date"])
        return True, None, rental

    @staticmethod
    def get_rental(rental_id: int, store: Optional[Store] = None) -> dict:
        """Return a rental dict by id or raise RentalNotFoundError."""
        st = store or common._store()
        r = st.find_rental(rental_id)
        if r is None:
            raise RentalNotFoundError()
        return r

    @staticmethod
    def list_rentals(store: Optional[Store] = None) -> list[dict]:
        st = store or common._store()
        return _newest_first(st.list_rentals())

    @staticmethod
    def rentals_for_customer(customer_id: int, requester: Requester, store: Optional[Store] = None) -> list[dict]:
        """A customer's rentals, newest first. Only the owner or an admin may look."""
        if not requester.may_act_for(customer_id):
            raise PermissionDeniedError()
        st = store or common._store()
        return _newest_first(st.find_rentals_for_customer(customer_id))

    @staticmethod
    def update_rental(rental_id: int, changes: RentalUpdate, store: Optional[Store] = None) -> dict:
        """
        Admin edit of a rental.
        Only date ordering is re-checked; overlap and active-rental rules are
        not re-run on updates.
        """
        st = store or common._store()
        with st.transaction():
            current = st.find_rental(rental_id)
            if current is None:
                raise RentalNotFoundError()

            updates = changes.model_dump(exclude_unset=True, exclude_none=True)
            start = updates.get("start_date", current["start_date"])
            end = updates.get("end_date", current["end_date"])
            if end <= start:
                raise InvalidDateRangeError()

            rental = st.update_rental(rental_id, updates)
        logger.info("Rental %s updated: %s", rental_id, sorted(updates))
        return rental

    @staticmethod
    def delete_rental(rental_id: int, store: Optional[Store] = None) -> None:
        st = store or common._store()
        if not st.delete_rental(rental_id):
            raise RentalNotFoundError()
        logger.info("Rental %s deleted", rental_id)
