from flask import Blueprint, jsonify

from ..models.schemas import CarCreate, CarUpdate
from ..services.car_service import CarService
from ..services.common import car_to_json
from ..utils.decorators import admin_required, token_required, validate_body

bp = Blueprint("cars", __name__, url_prefix="/api/cars")


@bp.get("")
@token_required
def list_cars():
    return jsonify([car_to_json(c) for c in CarService.list_cars()])


@bp.get("/<int:car_id>")
@token_required
def get_car(car_id):
    return jsonify(car_to_json(CarService.get_car(car_id)))


@bp.get("/<int:car_id>/availability")
@token_required
def car_availability(car_id):
    """Booked periods of the car, for disabling dates in the booking form."""
    return jsonify(CarService.availability_calendar(car_id))


@bp.post("")
@token_required
@admin_required
@validate_body(CarCreate)
def create_car(payload):
    return jsonify(car_to_json(CarService.create_car(payload))), 201


@bp.put("/<int:car_id>")
@token_required
@admin_required
@validate_body(CarUpdate)
def update_car(car_id, payload):
    return jsonify(car_to_json(CarService.update_car(car_id, payload)))


@bp.delete("/<int:car_id>")
@token_required
@admin_required
def delete_car(car_id):
    CarService.delete_car(car_id)
    return jsonify({"message": "Car deleted successfully"})
