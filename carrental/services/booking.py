"""Booking validation: decide whether a rental request may be created."""

from datetime import date
from typing import Optional

from carrental.models.requester import Requester
from carrental.models.schemas import RentalRequest
from carrental.models.store import Store
from carrental.services.common import overlap
from carrental.utils.constants import Rejection


def validate_booking(
        req: RentalRequest,
        requester: Requester,
        store: Store,
        today: date,
) -> Optional[Rejection]:
    """
    Run the booking checks in order and return the first failure, or None.

    1. start date not in the past
    2. end date strictly after start date
    3. customers book only for themselves
    4. customer and car exist
    5. no rental of the car overlaps [start, end] (inclusive)
    6. the customer holds no rental ending today or later

    Date well-formedness is handled earlier by the RentalRequest schema.
    """
    if req.start_date < today:
        return Rejection.PAST_START_DATE
    if req.end_date <= req.start_date:
        return Rejection.INVALID_DATE_RANGE

    if not requester.may_act_for(req.customer_id):
        return Rejection.FORBIDDEN

    if store.find_customer(req.customer_id) is None:
        return Rejection.CUSTOMER_NOT_FOUND
    if store.find_car(req.car_id) is None:
        return Rejection.CAR_NOT_FOUND

    for r in store.find_rentals_for_car(req.car_id):
        if overlap(req.start_date, req.end_date, r["start_date"], r["end_date"]):
            return Rejection.CAR_UNAVAILABLE

    if store.find_active_or_future_rentals_for_customer(req.customer_id, as_of=today):
        return Rejection.ACTIVE_RENTAL_EXISTS

    return None
