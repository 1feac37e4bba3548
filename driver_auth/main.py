"""Flask application entry point.

create_app() wires configuration, storage and the auth service into a Flask
app. main() additionally configures logging and runs the development server:

    $ DRIVER_AUTH_ENV=dev DRIVER_AUTH_JWT_SECRET_KEY=... driver-auth
"""

import json
import logging
import time

from flask import Flask, g, jsonify, request
from flask_cors import CORS

from .api import AUTH_SERVICE_EXTENSION, auth_bp, error_response
from .auth import AuthService, CredentialHasher, TokenIssuer
from .config import Settings, settings
from .db import SQLiteUserRegistry, init_db
from .exceptions import (
    AuthError,
    ConfigurationError,
    DriverAuthError,
    ErrorKind,
    ValidationError,
)
from .utils import uid

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ============================================================================
# Logging
# ============================================================================


class JSONFormatter(logging.Formatter):
    """Render each log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(env: str) -> None:
    """
    Configure the root logger for an environment.

    - local: DEBUG, human-readable lines
    - dev: DEBUG, JSON lines
    - prod: INFO, JSON lines

    Raises:
        ConfigurationError: If env is unknown
    """
    if env == "local":
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, force=True)
        return

    if env == "dev":
        level = logging.DEBUG
    elif env == "prod":
        level = logging.INFO
    else:
        raise ConfigurationError(f"unknown environment: {env}", {"env": env})

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


# ============================================================================
# Error handlers
# ============================================================================


def handle_validation_error(error: ValidationError):
    """Handle ValidationError exceptions."""
    return error_response("ValidationError", error.message, 400, error.details)


def handle_auth_error(error: AuthError):
    """Handle AuthError signals that escaped an endpoint.

    Internal failures are rendered without their message or details.
    """
    if error.kind is ErrorKind.USER_EXISTS:
        return error_response(error.kind.value, error.message, 409)
    if error.kind is ErrorKind.INVALID_CREDENTIALS:
        return error_response(error.kind.value, error.message, 401)
    logger.error(f"Internal error: {error!r}")
    return error_response(ErrorKind.INTERNAL.value, "An internal error occurred", 500)


def handle_driver_auth_error(error: DriverAuthError):
    """Handle generic DriverAuthError exceptions."""
    logger.error(f"Unhandled {error.__class__.__name__}: {error.message}")
    return error_response(error.__class__.__name__, "An internal error occurred", 500)


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return error_response("InternalServerError", "An internal error occurred", 500)


# ============================================================================
# Request hooks
# ============================================================================


def assign_request_id():
    """Use the caller's X-Request-ID or generate one, and start the request timer."""
    g.request_start = time.perf_counter()
    g.request_id = request.headers.get(REQUEST_ID_HEADER) or uid.generate_uuid()


def echo_request_id(response):
    """Return the request id to the caller."""
    request_id = g.get("request_id")
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


def log_request(response):
    """Write one access-log line per completed request."""
    start = g.get("request_start")
    duration_ms = (time.perf_counter() - start) * 1000 if start is not None else 0.0
    logger.info(
        f"request completed: method={request.method} path={request.path} "
        f"status={response.status_code} duration={duration_ms:.2f}ms "
        f"request_id={g.get('request_id', '-')}"
    )
    return response


# ============================================================================
# App factory
# ============================================================================


def build_auth_service(app_settings: Settings) -> AuthService:
    """
    Build the auth service backed by the SQLite database.

    Initializes the database schema on first use. Failures here are fatal
    to startup.
    """
    init_db(app_settings.database_path)
    registry = SQLiteUserRegistry(
        app_settings.database_path,
        timeout=app_settings.database_timeout
    )
    return AuthService(
        user_saver=registry,
        user_provider=registry,
        token_issuer=TokenIssuer(
            app_settings.jwt_secret_key,
            algorithm=app_settings.jwt_algorithm
        ),
        token_ttl=app_settings.token_ttl,
        hasher=CredentialHasher(app_settings.bcrypt_work_factor),
    )


def create_app(app_settings: Settings | None = None, auth_service: AuthService | None = None) -> Flask:
    """
    Create the Flask application.

    Args:
        app_settings: Configuration (default: settings loaded from environment)
        auth_service: Pre-built service; built from app_settings when omitted

    Returns:
        Configured Flask app
    """
    app_settings = app_settings or settings

    if auth_service is None:
        try:
            auth_service = build_auth_service(app_settings)
        except DriverAuthError as e:
            logger.error(f"Failed to initialize auth service: {e.message}")
            raise
        logger.info("Database initialized successfully")

    app = Flask(__name__)
    app.extensions[AUTH_SERVICE_EXTENSION] = auth_service

    # CORS configuration
    CORS(app, origins=app_settings.cors_origins, supports_credentials=True)

    app.before_request(assign_request_id)
    app.after_request(echo_request_id)
    app.after_request(log_request)

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(AuthError, handle_auth_error)
    app.register_error_handler(DriverAuthError, handle_driver_auth_error)
    app.register_error_handler(500, handle_internal_error)

    @app.route("/")
    def index():
        return "welcome anonymous"

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    app.register_blueprint(auth_bp)

    return app


def main() -> None:
    """Run the development server."""
    setup_logging(settings.env)
    logger.info(f"starting driver-auth server (env={settings.env})")
    logger.debug("debug messages are enabled")

    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=settings.env == "local")
    logger.info("server stopped")


if __name__ == "__main__":
    main()
