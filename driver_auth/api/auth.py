"""Authentication endpoints for driver-auth.

- POST /signup - Register a new user
- POST /signin - Check credentials and return a token for an application

Endpoints map AuthService signals one-to-one onto user-visible messages.
Internal failure details are logged here and never returned to the client.
"""

import logging

from flask import Blueprint, current_app, g, jsonify

from ..auth.schemas import SignInRequest, SignInResponse, SignUpRequest, SignUpResponse
from ..auth.service import AuthService
from ..exceptions import AuthError, ErrorKind
from .responses import error_response
from .validation import validate_request

logger = logging.getLogger(__name__)

AUTH_SERVICE_EXTENSION = "driver_auth.auth_service"


# Create blueprint
auth_bp = Blueprint("auth", __name__)


def get_auth_service() -> AuthService:
    """Return the AuthService wired into the current app by create_app()."""
    return current_app.extensions[AUTH_SERVICE_EXTENSION]


def _request_id() -> str:
    return g.get("request_id", "-")


@auth_bp.post("/signup")
@validate_request
def signup(data: SignUpRequest):
    """
    Register a new user.

    Example request:
    ```json
    {"email": "a@x.com", "password": "pw1"}
    ```

    Responses:
        201: {"id": 1}
        400: ValidationError
        409: UserExists - "user already exists"
        500: InternalError - "failed to save user"
    """
    op = "handlers.auth.signup"
    try:
        user_id = get_auth_service().register_new_user(data.email, data.password)
    except AuthError as e:
        if e.kind is ErrorKind.USER_EXISTS:
            logger.warning(f"{op}: user already exists (request_id={_request_id()})")
            return error_response(e.kind.value, "user already exists", 409)

        logger.error(f"{op}: failed to save user (request_id={_request_id()}): {e}")
        return error_response(ErrorKind.INTERNAL.value, "failed to save user", 500)

    logger.info(f"{op}: user registered id={user_id} (request_id={_request_id()})")
    return jsonify(SignUpResponse(id=user_id).model_dump()), 201


@auth_bp.post("/signin")
@validate_request
def signin(data: SignInRequest):
    """
    Authenticate a user for an application and return a JWT token.

    Example request:
    ```json
    {"email": "a@x.com", "password": "pw1", "appId": 5}
    ```

    Responses:
        200: {"token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."}
        400: ValidationError
        401: InvalidCredentials - "invalid email or password"
        500: InternalError - "failed to login"
    """
    op = "handlers.auth.signin"
    try:
        token = get_auth_service().login(data.email, data.password, data.app_id)
    except AuthError as e:
        if e.kind is ErrorKind.INVALID_CREDENTIALS:
            logger.warning(f"{op}: invalid email or password (request_id={_request_id()})")
            return error_response(e.kind.value, "invalid email or password", 401)

        logger.error(f"{op}: failed to login (request_id={_request_id()}): {e}")
        return error_response(ErrorKind.INTERNAL.value, "failed to login", 500)

    return jsonify(SignInResponse(token=token).model_dump()), 200
