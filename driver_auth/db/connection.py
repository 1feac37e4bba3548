"""SQLite connection and schema initialization."""

import sqlite3
from pathlib import Path

from ..config import settings
from ..exceptions import DatabaseError

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def connect(database_path: str | None = None, timeout: float | None = None) -> sqlite3.Connection:
    """Create a fresh database connection.

    Args:
        database_path: SQLite file path (default: settings.database_path)
        timeout: Seconds to wait for a locked database (default: settings.database_timeout)

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
    """
    db_path = Path(database_path or settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(
        str(db_path),
        timeout=settings.database_timeout if timeout is None else timeout,
    )
    conn.row_factory = sqlite3.Row
    return conn


def init_db(database_path: str | None = None) -> None:
    """Initialize database by running schema.sql if not already initialized.

    Raises:
        DatabaseError: If the schema file is missing or cannot be applied
    """
    if not SCHEMA_PATH.exists():
        raise DatabaseError("schema file not found", {"path": str(SCHEMA_PATH)})

    try:
        conn = connect(database_path)
    except sqlite3.Error as e:
        raise DatabaseError(
            "failed to open database",
            {"database_path": database_path or settings.database_path}
        ) from e

    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        with open(SCHEMA_PATH, "r") as f:
            schema_sql = f.read()
        conn.executescript(schema_sql)
        conn.commit()
    except sqlite3.Error as e:
        raise DatabaseError(
            "failed to initialize database",
            {"database_path": database_path or settings.database_path}
        ) from e
    finally:
        conn.close()


def get_schema_version(database_path: str | None = None) -> str:
    """Get current schema version from _schema_metadata table."""
    conn = connect(database_path)
    try:
        row = conn.execute(
            "SELECT value FROM _schema_metadata WHERE key = 'version'"
        ).fetchone()
        return row[0] if row else "unknown"
    finally:
        conn.close()
