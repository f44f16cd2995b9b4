from dataclasses import dataclass
from typing import Optional

from carrental.utils.constants import Role


@dataclass(frozen=True)
class Requester:
    """
    The authenticated caller of a request. The store keeps raw customer dicts;
    the token layer wraps the current one into this object.
    """
    id: int
    username: str
    role: str  # "ADMIN" | "CUSTOMER"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def may_act_for(self, customer_id: int) -> bool:
        """Admins act for anyone; customers only for themselves."""
        return self.is_admin or self.id == customer_id


def requester_from_customer(customer: Optional[dict], role: Optional[dict]) -> Optional[Requester]:
    """Map a stored customer dict (plus its role record) to a Requester."""
    if not customer:
        return None
    role_name = (role or {}).get("role_name") or Role.CUSTOMER
    return Requester(id=customer["id"], username=customer["username"], role=role_name)
