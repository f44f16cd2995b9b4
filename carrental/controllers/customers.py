from flask import Blueprint, g, jsonify

from ..models.schemas import CustomerCreate, CustomerUpdate
from ..services.common import _store, customer_to_json
from ..services.customer_service import CustomerService
from ..utils.decorators import admin_required, token_required, validate_body

bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@bp.get("")
@token_required
@admin_required
def list_customers():
    store = _store()
    return jsonify([customer_to_json(c, store) for c in CustomerService.list_customers(store=store)])


@bp.get("/<int:customer_id>")
@token_required
def get_customer(customer_id):
    """Owner or admin only."""
    store = _store()
    return jsonify(customer_to_json(CustomerService.get_customer(customer_id, g.requester, store=store), store))


@bp.get("/username/<username>")
@token_required
@admin_required
def get_customer_by_username(username):
    store = _store()
    return jsonify(customer_to_json(CustomerService.get_by_username(username, store=store), store))


@bp.post("")
@token_required
@admin_required
@validate_body(CustomerCreate)
def create_customer(payload):
    store = _store()
    customer = CustomerService.admin_create_customer(payload, store=store)
    return jsonify(customer_to_json(customer, store)), 201


@bp.put("/<int:customer_id>")
@token_required
@validate_body(CustomerUpdate)
def update_customer(customer_id, payload):
    """Owner or admin; role and enabled changes are admin-only."""
    store = _store()
    customer = CustomerService.update_customer(customer_id, payload, g.requester, store=store)
    return jsonify(customer_to_json(customer, store))


@bp.delete("/<int:customer_id>")
@token_required
@admin_required
def delete_customer(customer_id):
    CustomerService.delete_customer(customer_id)
    return jsonify({"message": "Customer deleted successfully"})
