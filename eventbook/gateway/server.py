"""
API gateway: combines the auth, events, orders, profile and stats blueprints.
This is the local entrypoint for development.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from eventbook.config import Config
from eventbook.common.errors import ServiceError
from eventbook.database import db_connection
from eventbook.gateway.commands import register_cli_commands

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def create_app(config: Optional[type] = None, database: Optional[db_connection.Database] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config: Config class to load (defaults to `Config`).
        database: Pre-built Database to inject instead of one built from config.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    app.config.from_object(config or Config)

    # Basic console logging during API requests
    logging.basicConfig(level=app.config["LOG_LEVEL"], format=LOG_FORMAT)

    CORS(app, resources={
        r"/*": {
            "origins": app.config["CORS_ORIGINS"],
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type", "Authorization"],
            "supports_credentials": True
        }
    })

    # One persistence handle for the whole process, shared by every handler
    db_connection.init_app(app, database)

    # --- REGISTER BLUEPRINTS ---
    from eventbook.auth_service.routes import auth_bp
    from eventbook.events_service.routes import events_bp
    from eventbook.orders_service.routes import orders_bp
    from eventbook.profile_service.routes import profile_bp
    from eventbook.stats_service.routes import stats_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(events_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(stats_bp)

    logging.info("All blueprints registered successfully.")

    register_request_logging(app)
    register_error_handlers(app)
    register_cli_commands(app)

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    return app


def register_request_logging(app: Flask) -> None:
    # Method and path only; headers and bodies carry tokens and passwords
    @app.before_request
    def before_request() -> None:
        logging.info(f"[Gateway] Incoming {request.method} {request.path}")

    @app.after_request
    def after_request(response):
        logging.info(f"[Gateway] Response {response.status} for {request.method} {request.path}")
        return response


def register_error_handlers(app: Flask) -> None:
    """
    Map every failure escaping a handler onto a JSON `{"error": ...}` body.
    """

    @app.errorhandler(ServiceError)
    def service_error(error: ServiceError):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def internal_error(error: Exception):
        logging.exception(f"[Gateway] Unhandled error on {request.method} {request.path}")
        return jsonify({"error": "Internal server error"}), 500


if __name__ == "__main__":
    app = create_app()
    app.extensions["db"].init_db()
    app.run(host="0.0.0.0", port=app.config["GATEWAY_PORT"], debug=True)
