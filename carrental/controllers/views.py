from datetime import datetime, timezone

from flask import Blueprint, jsonify

bp = Blueprint("views", __name__)


@bp.get("/api/health")
def health():
    return jsonify({
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    })
