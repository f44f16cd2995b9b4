"""
The inclusive overlap predicate, checked against the three-way formulation
(start inside, end inside, or spanning), and the standing rule that no two
accepted rentals of one car ever overlap, also under concurrent requests.
"""

import random
import threading
from datetime import date, timedelta

from conftest import as_requester, make_car, make_customer
from carrental.models.schemas import RentalRequest
from carrental.services.common import overlap
from carrental.services.rental_service import RentalService
from carrental.utils.constants import Rejection, Role

BASE = date(2030, 3, 1)


def three_way_conflict(new_start, new_end, s, e):
    start_inside = new_start <= s <= new_end
    end_inside = new_start <= e <= new_end
    spans = s <= new_start and e >= new_end
    return start_inside or end_inside or spans


def test_overlap_matches_three_way_formulation():
    days = [BASE + timedelta(days=i) for i in range(8)]
    ranges = [(a, b) for a in days for b in days if a <= b]
    for new_start, new_end in ranges:
        for s, e in ranges:
            assert overlap(new_start, new_end, s, e) == three_way_conflict(new_start, new_end, s, e), \
                (new_start, new_end, s, e)


def test_overlap_is_symmetric_and_inclusive():
    d = lambda n: BASE + timedelta(days=n)
    assert overlap(d(0), d(3), d(3), d(5))
    assert overlap(d(3), d(5), d(0), d(3))
    assert not overlap(d(0), d(3), d(4), d(5))
    assert not overlap(d(4), d(5), d(0), d(3))


def test_accepted_rentals_never_overlap(store):
    """Random booking attempts by an admin; whatever gets accepted is pairwise disjoint per car."""
    rng = random.Random(1234)
    admin = as_requester(make_customer(store, "boss", role=Role.ADMIN), Role.ADMIN)
    cars = [make_car(store, f"RND-{i}") for i in range(3)]
    customers = [make_customer(store, f"cust{i}") for i in range(30)]
    today = BASE

    for cust in customers:
        start = BASE + timedelta(days=rng.randint(0, 40))
        end = start + timedelta(days=rng.randint(1, 6))
        req = RentalRequest(startDate=start, endDate=end, customerId=cust["id"], carId=rng.choice(cars)["id"])
        RentalService.create_rental(req, admin, store=store, today=today)

    assert store.rentals
    for car in cars:
        booked = store.find_rentals_for_car(car["id"])
        for i, a in enumerate(booked):
            for b in booked[i + 1:]:
                assert b["start_date"] > a["end_date"] or a["start_date"] > b["end_date"]


def test_concurrent_bookings_for_same_car_admit_one(store):
    car = make_car(store, "RACE-1")
    customers = [make_customer(store, f"racer{i}") for i in range(8)]
    barrier = threading.Barrier(len(customers))
    results = []
    lock = threading.Lock()

    def attempt(cust):
        req = RentalRequest(startDate="2030-05-10", endDate="2030-05-14", customerId=cust["id"], carId=car["id"])
        barrier.wait()
        outcome = RentalService.create_rental(req, as_requester(cust), store=store, today=BASE)
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=attempt, args=(c,)) for c in customers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    accepted = [r for ok, _, r in results if ok]
    rejected = [rej for ok, rej, _ in results if not ok]
    assert len(accepted) == 1
    assert all(rej is Rejection.CAR_UNAVAILABLE for rej in rejected)
    assert len(store.find_rentals_for_car(car["id"])) == 1
