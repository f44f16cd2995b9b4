from flask import Blueprint, jsonify

from ..exceptions import RoleNotFoundError
from ..services.common import _store, role_to_json
from ..utils.decorators import token_required

bp = Blueprint("roles", __name__, url_prefix="/api/roles")


@bp.get("")
@token_required
def list_roles():
    return jsonify([role_to_json(r) for r in _store().list_roles()])


@bp.get("/<int:role_id>")
@token_required
def get_role(role_id):
    role = _store().find_role(role_id)
    if role is None:
        raise RoleNotFoundError()
    return jsonify(role_to_json(role))
