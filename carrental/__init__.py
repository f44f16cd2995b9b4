import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Settings, load_settings
from .controllers.auth import bp as auth_bp
from .controllers.cars import bp as cars_bp
from .controllers.customers import bp as customers_bp
from .controllers.rentals import bp as rentals_bp
from .controllers.roles import bp as roles_bp
from .controllers.views import bp as views_bp
from .exceptions import CarRentalError
from .models.store import Store
from .services.common import STORE_KEY
from .services.seed_service import SeedService

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(CarRentalError)
    def handle_domain_error(e: CarRentalError):
        return jsonify({"message": e.message}), e.status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error: %s", e)
        return jsonify({"message": "Internal server error"}), 500


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None):
    settings = settings or load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["SETTINGS"] = settings
    app.json.sort_keys = False

    store = store if store is not None else Store(settings.data_path)
    app.extensions[STORE_KEY] = store
    if settings.seed_defaults:
        SeedService.ensure_defaults(store)

    app.register_blueprint(auth_bp)
    app.register_blueprint(cars_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(rentals_bp)
    app.register_blueprint(roles_bp)
    app.register_blueprint(views_bp)
    _register_error_handlers(app)

    logger.info("App ready (%r)", settings)
    return app
