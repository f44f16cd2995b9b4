import logging
from functools import wraps

import jwt
from flask import current_app, g, jsonify, request
from pydantic import BaseModel, ValidationError

from carrental.models.requester import requester_from_customer
from carrental.services.common import _store, _today
from carrental.utils.security import bearer_token, decode_token

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra):
    body = {"message": message}
    body.update(extra)
    return jsonify(body), status


def validation_errors(exc: ValidationError) -> list[dict]:
    """Flatten pydantic errors into [{field, message}] using the wire (alias) names."""
    out = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "body"
        out.append({"field": field, "message": err.get("msg", "Invalid value")})
    return out


def token_required(fn):
    """
    Verify the bearer token and expose the caller as ``g.requester``.
    The customer is re-loaded from the store so deletes and disables apply at once.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = bearer_token(request.headers.get("Authorization"))
        if not token:
            return error_response("Access token required", 401)

        settings = current_app.config["SETTINGS"]
        try:
            payload = decode_token(token, settings.jwt_secret)
        except jwt.InvalidTokenError as e:
            logger.info("Rejected token: %s", e)
            return error_response("Invalid or expired token", 401)

        store = _store()
        customer = store.find_customer(payload["userId"])
        if not customer or not customer.get("enabled", True):
            return error_response("Invalid or expired token", 401)

        g.requester = requester_from_customer(customer, store.find_role(customer["role_id"]))
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn):
    """Must be stacked under @token_required."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        requester = g.get("requester")
        if requester is None or not requester.is_admin:
            return error_response("Admin access required", 403)
        return fn(*args, **kwargs)

    return wrapper


def validate_body(schema: type[BaseModel]):
    """Parse the JSON body with ``schema`` and pass it to the view as ``payload``."""
    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return error_response("Request body must be a JSON object", 400)
            try:
                payload = schema.model_validate(data, context={"today": _today()})
            except ValidationError as e:
                return error_response("Validation failed", 400, errors=validation_errors(e))
            return fn(*args, payload=payload, **kwargs)

        return wrapper

    return deco
