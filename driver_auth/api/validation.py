"""Request body validation for Flask endpoints.

@validate_request inspects the endpoint's type hints. Every parameter
annotated with a Pydantic model is filled from the JSON request body;
other parameters (path variables) are passed through untouched.

    @auth_bp.post("/signup")
    @validate_request
    def signup(data: SignUpRequest):
        ...

Validation failures raise driver_auth ValidationError, which main.py
renders as a 400 response. The error details name the offending fields
but never echo submitted values (passwords).
"""

from functools import wraps
from typing import Any, get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _read_json_body() -> Any:
    """Read the request body as JSON.

    Raises:
        ValidationError: If the body is empty or not valid JSON
    """
    raw = request.get_data(cache=True)
    if not raw.strip():
        raise ValidationError("empty request")

    data = request.get_json(force=True, silent=True)
    if data is None:
        raise ValidationError("failed to decode request")
    return data


def _format_errors(error: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in error.errors()
    ]


def validate_request(f):
    """Decorator that validates the JSON body against the endpoint's Pydantic models."""
    hints = get_type_hints(f)
    hints.pop("return", None)
    models = {name: hint for name, hint in hints.items() if _is_model(hint)}

    @wraps(f)
    def wrapper(*args, **kwargs):
        if models:
            body = _read_json_body()
            for name, model in models.items():
                try:
                    kwargs[name] = model.model_validate(body)
                except PydanticValidationError as e:
                    raise ValidationError(
                        "invalid request",
                        {"errors": _format_errors(e)}
                    ) from e
        return f(*args, **kwargs)

    return wrapper
