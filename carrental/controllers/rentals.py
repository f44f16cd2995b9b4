from flask import Blueprint, g, jsonify

from ..models.schemas import RentalRequest, RentalUpdate
from ..services.common import _store, rental_to_json
from ..services.rental_service import RentalService
from ..utils.decorators import admin_required, error_response, token_required, validate_body

bp = Blueprint("rentals", __name__, url_prefix="/api/rentals")


@bp.get("")
@token_required
@admin_required
def list_rentals():
    """All rentals, newest start date first (admin only)."""
    store = _store()
    return jsonify([rental_to_json(r, store) for r in RentalService.list_rentals(store=store)])


@bp.get("/<int:rid>")
@token_required
@admin_required
def get_rental(rid):
    store = _store()
    return jsonify(rental_to_json(RentalService.get_rental(rid, store=store), store))


@bp.get("/customer/<int:customer_id>")
@token_required
def customer_rentals(customer_id):
    """A customer's own rentals; admins may look at anyone's."""
    store = _store()
    rentals = RentalService.rentals_for_customer(customer_id, g.requester, store=store)
    return jsonify([rental_to_json(r, store) for r in rentals])


@bp.post("")
@token_required
@validate_body(RentalRequest)
def create_rental(payload):
    """Create a rental if every booking rule passes."""
    store = _store()
    ok, rejection, rental = RentalService.create_rental(payload, g.requester, store=store)
    if not ok:
        return error_response(rejection.message, rejection.status, error=rejection.kind)
    return jsonify(rental_to_json(rental, store)), 201


@bp.put("/<int:rid>")
@token_required
@admin_required
@validate_body(RentalUpdate)
def update_rental(rid, payload):
    store = _store()
    rental = RentalService.update_rental(rid, payload, store=store)
    return jsonify(rental_to_json(rental, store))


@bp.delete("/<int:rid>")
@token_required
@admin_required
def delete_rental(rid):
    RentalService.delete_rental(rid)
    return jsonify({"message": "Rental deleted successfully"})
