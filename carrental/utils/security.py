from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

JWT_ALGORITHM = "HS256"


def generate_hash(password: str) -> str:
    return generate_password_hash(password)


def check_hash(password: str, hashed: str) -> bool:
    try:
        return check_password_hash(hashed, password)
    except (TypeError, ValueError):
        return False


def issue_token(customer: dict, role_name: str, secret: str, expires_hours: int = 24) -> str:
    """Sign a bearer token identifying the customer and its role."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": customer["id"],
        "username": customer["username"],
        "role": role_name,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=expires_hours)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str) -> dict:
    """Verify signature and expiry; raises jwt.InvalidTokenError on failure."""
    payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    if not isinstance(payload.get("userId"), int):
        raise jwt.InvalidTokenError("token carries no user id")
    return payload


def bearer_token(header_value: str | None) -> str | None:
    """Extract the token from an 'Authorization: Bearer <token>' header value."""
    if not header_value:
        return None
    scheme, _, token = header_value.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
