"""UUID generation utilities.

Request ids are the only UUIDs in driver-auth; user ids are integers
assigned by the storage engine.
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())
