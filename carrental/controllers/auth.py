import logging

import jwt
from flask import Blueprint, current_app, jsonify, request

from ..models.schemas import LoginPayload, RegisterPayload
from ..services.auth_service import AuthService
from ..services.common import _store, customer_summary, customer_to_json
from ..services.customer_service import CustomerService
from ..utils.decorators import error_response, validate_body
from ..utils.security import bearer_token, decode_token

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@bp.post("/register")
@validate_body(RegisterPayload)
def register(payload):
    customer = CustomerService.register(payload)
    return jsonify({
        "message": "User registered successfully",
        "user": customer_summary(customer),
    }), 201


@bp.post("/login")
@validate_body(LoginPayload)
def login(payload):
    store = _store()
    ok, msg, token, customer = AuthService.login(
        payload.username, payload.password, current_app.config["SETTINGS"], store=store,
    )
    if not ok:
        return error_response(msg, 401)
    return jsonify({"message": msg, "token": token, "user": customer_to_json(customer, store)})


@bp.get("/validate")
def validate():
    """Tell the SPA whether its stored token is still good, and who it belongs to."""
    token = bearer_token(request.headers.get("Authorization"))
    if not token:
        return error_response("No token provided", 401)
    try:
        payload = decode_token(token, current_app.config["SETTINGS"].jwt_secret)
    except jwt.InvalidTokenError as e:
        logger.info("Token validation failed: %s", e)
        return error_response("Invalid token", 401)

    store = _store()
    customer = store.find_customer(payload["userId"])
    if not customer or not customer.get("enabled", True):
        return error_response("Invalid token", 401)
    return jsonify({"message": "Token is valid", "user": customer_to_json(customer, store)})
