"""JSON error envelope shared by endpoints and error handlers.

    {"error": {"type": "...", "message": "...", "details": {...}}}

details is omitted when empty.
"""

from flask import jsonify


def error_response(error_type: str, message: str, status: int, details: dict | None = None):
    """Build a (response, status) tuple with the standard error envelope."""
    body = {
        "error": {
            "type": error_type,
            "message": message
        }
    }
    if details:
        body["error"]["details"] = details
    return jsonify(body), status
