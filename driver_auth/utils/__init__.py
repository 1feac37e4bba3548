"""Utility functions for driver-auth.

Import convention: use module-level imports for clarity.

    from driver_auth.utils import isodatetime, uid
    created_at = isodatetime.now()
    request_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
