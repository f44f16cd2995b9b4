"""
Rental administration at the service layer: listing order, per-customer
views, admin updates (date ordering only) and deletion.
"""

from datetime import date

import pytest

from conftest import as_requester, book, make_car, make_customer
from carrental.exceptions import (
    CarNotFoundError,
    InvalidDateRangeError,
    PermissionDeniedError,
    RentalNotFoundError,
)
from carrental.models.schemas import RentalUpdate
from carrental.services.rental_service import RentalService
from carrental.utils.constants import Role


@pytest.fixture
def seeded(store):
    anna = make_customer(store, "anna")
    bruno = make_customer(store, "bruno")
    panda = make_car(store, "AA-001")
    ducato = make_car(store, "BB-002", brand="Fiat", model="Ducato", category="Commerciale")
    r1 = book(store, anna, panda, "2030-01-10", "2030-01-12")
    r2 = book(store, bruno, ducato, "2030-02-01", "2030-02-03")
    r3 = book(store, anna, ducato, "2030-03-01", "2030-03-04")
    return {"anna": anna, "bruno": bruno, "panda": panda, "ducato": ducato, "rentals": (r1, r2, r3)}


def test_list_is_newest_start_first(store, seeded):
    starts = [r["start_date"] for r in RentalService.list_rentals(store=store)]
    assert starts == sorted(starts, reverse=True)


def test_owner_sees_only_own_rentals(store, seeded):
    anna = seeded["anna"]
    rows = RentalService.rentals_for_customer(anna["id"], as_requester(anna), store=store)
    assert {r["customer_id"] for r in rows} == {anna["id"]}
    assert [r["start_date"] for r in rows] == [date(2030, 3, 1), date(2030, 1, 10)]


def test_other_customer_cannot_list_rentals(store, seeded):
    with pytest.raises(PermissionDeniedError):
        RentalService.rentals_for_customer(seeded["anna"]["id"], as_requester(seeded["bruno"]), store=store)


def test_admin_lists_anyones_rentals(store, seeded):
    admin = as_requester(make_customer(store, "boss", role=Role.ADMIN), Role.ADMIN)
    rows = RentalService.rentals_for_customer(seeded["bruno"]["id"], admin, store=store)
    assert len(rows) == 1


def test_get_unknown_rental_raises(store):
    with pytest.raises(RentalNotFoundError):
        RentalService.get_rental(404, store=store)


def test_update_rejects_end_before_start(store, seeded):
    r1 = seeded["rentals"][0]
    with pytest.raises(InvalidDateRangeError):
        RentalService.update_rental(r1["id"], RentalUpdate(endDate="2030-01-09"), store=store)
    assert store.find_rental(r1["id"])["end_date"] == date(2030, 1, 12)


def test_update_checks_ordering_only(store, seeded):
    """Moving r1 onto r3's car and dates is accepted: overlap is not re-checked on update."""
    r1, _, r3 = seeded["rentals"]
    changes = RentalUpdate(startDate="2030-03-02", endDate="2030-03-03", carId=seeded["ducato"]["id"])
    updated = RentalService.update_rental(r1["id"], changes, store=store)
    assert updated["car_id"] == r3["car_id"]
    assert updated["start_date"] == date(2030, 3, 2)


def test_update_with_unknown_car_raises(store, seeded):
    r1 = seeded["rentals"][0]
    with pytest.raises(CarNotFoundError):
        RentalService.update_rental(r1["id"], RentalUpdate(carId=999), store=store)


def test_update_missing_rental_raises(store):
    with pytest.raises(RentalNotFoundError):
        RentalService.update_rental(5, RentalUpdate(endDate="2030-01-01"), store=store)


def test_delete_rental(store, seeded):
    r2 = seeded["rentals"][1]
    RentalService.delete_rental(r2["id"], store=store)
    assert store.find_rental(r2["id"]) is None
    with pytest.raises(RentalNotFoundError):
        RentalService.delete_rental(r2["id"], store=store)
