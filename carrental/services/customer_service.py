from __future__ import annotations

import logging
from typing import Optional

from carrental.exceptions import (
    CustomerNotFoundError,
    InvalidRoleError,
    PermissionDeniedError,
    RoleNotFoundError,
)
from carrental.models.requester import Requester
from carrental.models.schemas import CustomerCreate, CustomerUpdate, RegisterPayload
from carrental.models.store import Store
from carrental.services import common
from carrental.utils.constants import Role
from carrental.utils.security import generate_hash

logger = logging.getLogger(__name__)


def _record_from(payload: RegisterPayload, role_id: int) -> dict:
    return {
        "username": payload.username,
        "password_hash": generate_hash(payload.password),
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "date_of_birth": payload.date_of_birth,
        "enabled": True,
        "role_id": role_id,
    }


class CustomerService:
    """Customer admin operations, self-service registration and profile edits."""

    @staticmethod
    def list_customers(store: Optional[Store] = None) -> list[dict]:
        st = store or common._store()
        return sorted(st.list_customers(), key=lambda c: (c["first_name"], c["last_name"], c["id"]))

    @staticmethod
    def get_customer(customer_id: int, requester: Requester, store: Optional[Store] = None) -> dict:
        if not requester.may_act_for(customer_id):
            raise PermissionDeniedError()
        st = store or common._store()
        c = st.find_customer(customer_id)
        if c is None:
            raise CustomerNotFoundError()
        return c

    @staticmethod
    def get_by_username(username: str, store: Optional[Store] = None) -> dict:
        st = store or common._store()
        c = st.find_customer_by_username(username)
        if c is None:
            raise CustomerNotFoundError()
        return c

    @staticmethod
    def register(payload: RegisterPayload, store: Optional[Store] = None) -> dict:
        """Self-service sign-up; the role is always CUSTOMER."""
        st = store or common._store()
        role = st.find_role_by_name(Role.CUSTOMER)
        if role is None:
            raise RoleNotFoundError()
        c = st.create_customer(_record_from(payload, role["id"]))
        logger.info("Customer %s registered (%s)", c["id"], c["username"])
        return c

    @staticmethod
    def admin_create_customer(payload: CustomerCreate, store: Optional[Store] = None) -> dict:
        st = store or common._store()
        if st.find_role(payload.role_id) is None:
            raise InvalidRoleError()
        c = st.create_customer(_record_from(payload, payload.role_id))
        logger.info("Customer %s created by admin (%s)", c["id"], c["username"])
        return c

    @staticmethod
    def update_customer(
            customer_id: int,
            changes: CustomerUpdate,
            requester: Requester,
            store: Optional[Store] = None,
    ) -> dict:
        """
        Owner or admin may edit a profile. Role and enabled flag are admin-only.
        A new password is hashed before it is stored.
        """
        if not requester.may_act_for(customer_id):
            raise PermissionDeniedError()
        updates = changes.model_dump(exclude_unset=True, exclude_none=True)
        if "role_id" in updates and not requester.is_admin:
            raise PermissionDeniedError("Only admin can change user roles")
        if "enabled" in updates and not requester.is_admin:
            raise PermissionDeniedError("Only admin can enable or disable accounts")
        if "password" in updates:
            updates["password_hash"] = generate_hash(updates.pop("password"))

        st = store or common._store()
        c = st.update_customer(customer_id, updates)
        if c is None:
            raise CustomerNotFoundError()
        return c

    @staticmethod
    def delete_customer(customer_id: int, store: Optional[Store] = None) -> None:
        st = store or common._store()
        if not st.delete_customer(customer_id):
            raise CustomerNotFoundError()
        logger.info("Customer %s deleted", customer_id)
