import logging
import os
import pickle
import threading
from contextlib import contextmanager
from datetime import date, datetime, timezone

from carrental.exceptions import (
    CarNotFoundError,
    CustomerNotFoundError,
    DuplicateLicensePlateError,
    DuplicateUsernameError,
    InvalidRoleError,
    RecordInUseError,
)
from carrental.utils.constants import Role

logger = logging.getLogger(__name__)

TABLES = ("roles", "customers", "cars", "rentals")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class Store:
    """
    Thread-safe record store for roles, customers, cars and rentals.

    Records are plain dicts keyed by integer id. With a ``path`` every
    mutation is written to a pickle file (atomic replace); without one the
    store lives in memory only.
    """

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = str(path) if path else None
        self.roles: dict[int, dict] = {}
        self.customers: dict[int, dict] = {}
        self.cars: dict[int, dict] = {}
        self.rentals: dict[int, dict] = {}
        self._seq: dict[str, int] = {t: 0 for t in TABLES}
        self._rw = threading.RLock()

        logger.info("[Store] Using %s", self.path or "in-memory storage")
        self._load()
        self._ensure_roles()

    # ---------- Persistence ----------
    def _load(self):
        """Load data from the pickle file, or start empty if unavailable or invalid."""
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "rb") as f:
                data = pickle.load(f)
        except Exception as e:
            logger.warning("[Store] Load failed (%s); starting empty.", e)
            return

        if isinstance(data, dict) and all(t in data for t in TABLES):
            for t in TABLES:
                setattr(self, t, data.get(t) or {})
            self._seq = {t: max(getattr(self, t).keys(), default=0) for t in TABLES}
            self._seq.update(data.get("_seq") or {})
            logger.info(
                "[Store] Loaded: roles=%d, customers=%d, cars=%d, rentals=%d",
                len(self.roles), len(self.customers), len(self.cars), len(self.rentals),
            )
        else:
            # Incompatible data format: back up the old file and start empty
            bak = self.path + ".bak"
            os.replace(self.path, bak)
            logger.warning("[Store] Incompatible store (%s); backed up to %s. Starting empty.",
                           type(data).__name__, bak)

    def _dump(self):
        """Write the in-memory data to the pickle file safely (atomic replace)."""
        if not self.path:
            return
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        tmp = self.path + ".tmp"
        payload = {t: getattr(self, t) for t in TABLES}
        payload["_seq"] = dict(self._seq)
        with open(tmp, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def _commit(self, undo):
        """Persist pending changes; on failure run ``undo`` so memory matches disk, then re-raise."""
        try:
            self._dump()
        except Exception:
            undo()
            logger.exception("[Store] Save to %s failed; change rolled back.", self.path)
            raise

    def save(self):
        """Thread-safe save method."""
        with self._rw:
            logger.debug("[Store] Saving to %s ...", self.path)
            self._dump()

    def clear(self):
        """Drop every record; roles are re-seeded."""
        with self._rw:
            snapshot = {t: getattr(self, t) for t in TABLES}
            seq = dict(self._seq)

            def undo():
                for t in TABLES:
                    setattr(self, t, snapshot[t])
                self._seq = seq

            for t in TABLES:
                setattr(self, t, {})
                self._seq[t] = 0
            self._seed_roles()
            self._commit(undo)

    @contextmanager
    def transaction(self):
        """
        Hold the store lock across a read-check-write sequence.
        Nested store calls re-enter the same lock.
        """
        with self._rw:
            yield self

    def _next_id(self, table: str) -> int:
        self._seq[table] += 1
        return self._seq[table]

    def _undo_insert(self, table: str, record_id: int):
        def undo():
            getattr(self, table).pop(record_id, None)
            if self._seq[table] == record_id:
                self._seq[table] -= 1
        return undo

    def _undo_update(self, record: dict):
        before = dict(record)

        def undo():
            record.clear()
            record.update(before)
        return undo

    def _delete(self, table: str, record_id: int):
        rows = getattr(self, table)
        removed = rows.pop(record_id)

        def undo():
            rows[record_id] = removed
        self._commit(undo)

    # ---------- Roles ----------
    def _seed_roles(self) -> bool:
        created = False
        for name in Role.ALL:
            if self.find_role_by_name(name) is None:
                rid = self._next_id("roles")
                self.roles[rid] = {"id": rid, "role_name": name}
                created = True
        return created

    def _ensure_roles(self):
        with self._rw:
            if self._seed_roles():
                self._dump()

    def find_role(self, role_id: int) -> dict | None:
        return self.roles.get(role_id)

    def find_role_by_name(self, role_name: str) -> dict | None:
        with self._rw:
            for r in self.roles.values():
                if r["role_name"] == role_name:
                    return r
            return None

    def list_roles(self) -> list[dict]:
        with self._rw:
            return sorted(self.roles.values(), key=lambda r: r["role_name"])

    # ---------- Customers ----------
    def find_customer(self, customer_id: int) -> dict | None:
        """Get customer data by id."""
        return self.customers.get(customer_id)

    def find_customer_by_username(self, username: str) -> dict | None:
        with self._rw:
            for c in self.customers.values():
                if c["username"] == username:
                    return c
            return None

    def list_customers(self) -> list[dict]:
        with self._rw:
            return list(self.customers.values())

    def create_customer(self, data: dict) -> dict:
        """Create a new customer record and return it. ``data['password_hash']`` must be set."""
        with self._rw:
            if self.find_customer_by_username(data["username"]) is not None:
                raise DuplicateUsernameError()
            if data["role_id"] not in self.roles:
                raise InvalidRoleError()
            cid = self._next_id("customers")
            now = _now()
            self.customers[cid] = {
                "id": cid,
                "first_name": data["first_name"],
                "last_name": data["last_name"],
                "username": data["username"],
                "password_hash": data["password_hash"],
                "date_of_birth": data["date_of_birth"],
                "enabled": bool(data.get("enabled", True)),
                "role_id": data["role_id"],
                "created_at": now,
                "updated_at": now,
            }
            self._commit(self._undo_insert("customers", cid))
            return self.customers[cid]

    def update_customer(self, customer_id: int, updates: dict) -> dict | None:
        """Update customer attributes; return the record, or None if it does not exist."""
        with self._rw:
            c = self.customers.get(customer_id)
            if c is None:
                return None
            username = updates.get("username")
            if username and username != c["username"] and self.find_customer_by_username(username):
                raise DuplicateUsernameError()
            if "role_id" in updates and updates["role_id"] not in self.roles:
                raise InvalidRoleError()
            undo = self._undo_update(c)
            c.update({k: v for k, v in updates.items() if v is not None})
            c["updated_at"] = _now()
            self._commit(undo)
            return c

    def delete_customer(self, customer_id: int) -> bool:
        """Delete a customer; refused while rentals reference it."""
        with self._rw:
            if customer_id not in self.customers:
                return False
            if any(r["customer_id"] == customer_id for r in self.rentals.values()):
                raise RecordInUseError("Cannot delete customer: rentals exist for this customer")
            self._delete("customers", customer_id)
            return True

    # ---------- Cars ----------
    def find_car(self, car_id: int) -> dict | None:
        """Get car information by id."""
        return self.cars.get(car_id)

    def find_car_by_plate(self, license_plate: str) -> dict | None:
        with self._rw:
            for c in self.cars.values():
                if c["license_plate"] == license_plate:
                    return c
            return None

    def list_cars(self) -> list[dict]:
        with self._rw:
            return list(self.cars.values())

    def create_car(self, data: dict) -> dict:
        """Create a new car record and return it."""
        with self._rw:
            if self.find_car_by_plate(data["license_plate"]) is not None:
                raise DuplicateLicensePlateError()
            cid = self._next_id("cars")
            now = _now()
            self.cars[cid] = {
                "id": cid,
                "license_plate": data["license_plate"],
                "brand": data["brand"],
                "model": data["model"],
                "year": int(data["year"]),
                "category": data["category"],
                "created_at": now,
                "updated_at": now,
            }
            self._commit(self._undo_insert("cars", cid))
            return self.cars[cid]

    def update_car(self, car_id: int, updates: dict) -> dict | None:
        """Update car attributes; return the record, or None if it does not exist."""
        with self._rw:
            car = self.cars.get(car_id)
            if car is None:
                return None
            plate = updates.get("license_plate")
            if plate and plate != car["license_plate"] and self.find_car_by_plate(plate):
                raise DuplicateLicensePlateError()
            undo = self._undo_update(car)
            car.update({k: v for k, v in updates.items() if v is not None})
            car["updated_at"] = _now()
            self._commit(undo)
            return car

    def delete_car(self, car_id: int) -> bool:
        """Delete a car; refused while rentals reference it."""
        with self._rw:
            if car_id not in self.cars:
                return False
            if any(r["car_id"] == car_id for r in self.rentals.values()):
                raise RecordInUseError("Cannot delete car: rentals exist for this car")
            self._delete("cars", car_id)
            return True

    # ---------- Rentals ----------
    def find_rental(self, rental_id: int) -> dict | None:
        return self.rentals.get(rental_id)

    def list_rentals(self) -> list[dict]:
        with self._rw:
            return list(self.rentals.values())

    def find_rentals_for_car(self, car_id: int) -> list[dict]:
        with self._rw:
            return [r for r in self.rentals.values() if r["car_id"] == car_id]

    def find_rentals_for_customer(self, customer_id: int) -> list[dict]:
        with self._rw:
            return [r for r in self.rentals.values() if r["customer_id"] == customer_id]

    def find_active_or_future_rentals_for_customer(self, customer_id: int, as_of: date) -> list[dict]:
        """Rentals of the customer whose end date is ``as_of`` or later."""
        return [r for r in self.find_rentals_for_customer(customer_id) if r["end_date"] >= as_of]

    def insert_rental(self, record: dict) -> dict:
        """Insert a rental, assigning its id and timestamps. Nothing is kept if the save fails."""
        with self._rw:
            if record["customer_id"] not in self.customers:
                raise CustomerNotFoundError()
            if record["car_id"] not in self.cars:
                raise CarNotFoundError()
            rid = self._next_id("rentals")
            now = _now()
            self.rentals[rid] = {
                "id": rid,
                "start_date": record["start_date"],
                "end_date": record["end_date"],
                "customer_id": record["customer_id"],
                "car_id": record["car_id"],
                "created_at": now,
                "updated_at": now,
            }
            self._commit(self._undo_insert("rentals", rid))
            return self.rentals[rid]

    def update_rental(self, rental_id: int, updates: dict) -> dict | None:
        """Update an existing rental by id."""
        with self._rw:
            r = self.rentals.get(rental_id)
            if r is None:
                return None
            if "customer_id" in updates and updates["customer_id"] not in self.customers:
                raise CustomerNotFoundError()
            if "car_id" in updates and updates["car_id"] not in self.cars:
                raise CarNotFoundError()
            undo = self._undo_update(r)
            r.update({k: v for k, v in updates.items() if v is not None})
            r["updated_at"] = _now()
            self._commit(undo)
            return r

    def delete_rental(self, rental_id: int) -> bool:
        with self._rw:
            if rental_id not in self.rentals:
                return False
            self._delete("rentals", rental_id)
            return True
