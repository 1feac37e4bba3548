"""Database module for driver-auth.

SQLite is the storage engine. Connections are short-lived: every registry
operation opens its own connection and closes it when done, so registries
can be shared freely between request-handling threads. Concurrent writers
are serialized by SQLite itself; `timeout` is how long a connection waits
for the write lock before failing.

    init_db("./data/driver_auth.db")
    registry = SQLiteUserRegistry("./data/driver_auth.db")
    user_id = registry.save_user("a@x.com", password_hash)
"""

from .connection import connect, get_schema_version, init_db
from .memory import InMemoryUserRegistry
from .users import SQLiteUserRegistry

__all__ = [
    "connect",
    "init_db",
    "get_schema_version",
    "InMemoryUserRegistry",
    "SQLiteUserRegistry",
]
