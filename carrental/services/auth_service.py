import logging
from typing import Optional

from carrental.config import Settings
from carrental.models.store import Store
from carrental.services import common
from carrental.utils.constants import Role
from carrental.utils.security import check_hash, issue_token

logger = logging.getLogger(__name__)


class AuthService:
    """Credential check and token issuing."""

    @staticmethod
    def login(username: str, password: str, settings: Settings, store: Optional[Store] = None):
        """
        Returns:
            (ok: bool, message: str, token: Optional[str], customer: Optional[dict])
        """
        st = store or common._store()
        customer = st.find_customer_by_username(username)
        if customer is None:
            logger.info("Login failed: unknown user %r", username)
            return False, "Invalid credentials", None, None
        if not customer.get("enabled", True):
            logger.info("Login refused: account %r is disabled", username)
            return False, "Account is disabled", None, None
        if not check_hash(password, customer["password_hash"]):
            logger.info("Login failed: bad password for %r", username)
            return False, "Invalid credentials", None, None

        role = st.find_role(customer["role_id"]) or {}
        token = issue_token(
            customer,
            role.get("role_name") or Role.CUSTOMER,
            settings.jwt_secret,
            settings.jwt_expires_hours,
        )
        return True, "Login successful", token, customer
