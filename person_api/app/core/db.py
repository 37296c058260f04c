"""
SQLite database integration and the stored-procedure catalogue.

The service never embeds SQL in its data access code.  Instead every
database operation is a *stored procedure*: a named statement with a
fixed parameter list, kept inside the database itself in the
``stored_procedures`` table.  ``init_db`` creates the ``persons`` table
and installs the procedures; ``call_procedure`` looks one up by name,
binds its parameters and returns the result rows.

Connections are short lived.  ``procedure_connection`` opens one per
logical operation and closes it on exit, translating every
``sqlite3.Error`` into ``StorageError``.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import StorageError


logger = logging.getLogger(__name__)

# Salaries are fixed-point values; store them as their exact text form.
sqlite3.register_adapter(Decimal, str)


# name -> (parameter names, statement body)
PROCEDURES: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "GetAllPersons": (
        (),
        "SELECT id, name, salary FROM persons",
    ),
    "GetPersonById": (
        ("id",),
        "SELECT id, name, salary FROM persons WHERE id = :id",
    ),
    "AddPerson": (
        ("id", "name", "salary"),
        "INSERT INTO persons (id, name, salary) VALUES (:id, :name, :salary)",
    ),
    "UpdatePerson": (
        ("id", "name", "salary"),
        "UPDATE persons SET name = :name, salary = :salary WHERE id = :id",
    ),
    "DeletePerson": (
        ("id",),
        "DELETE FROM persons WHERE id = :id",
    ),
}

SCHEMA = """
CREATE TABLE IF NOT EXISTS persons (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    salary TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS stored_procedures (
    name TEXT PRIMARY KEY,
    params TEXT NOT NULL,
    body TEXT NOT NULL
);
"""


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative ones are resolved against
    the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    """
    conn = sqlite3.connect(get_database_path(database_url))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def procedure_connection(database_url: str) -> Iterator[sqlite3.Connection]:
    """Yield a fresh connection and close it on exit.

    Driver errors raised while opening or using the connection surface
    as ``StorageError``.
    """
    try:
        conn = get_connection(database_url)
    except sqlite3.Error as exc:
        raise StorageError(f"Cannot open database {database_url!r}: {exc}") from exc
    try:
        yield conn
    except sqlite3.Error as exc:
        raise StorageError(str(exc)) from exc
    finally:
        conn.close()


def call_procedure(
    conn: sqlite3.Connection,
    name: str,
    params: Optional[Mapping[str, Any]] = None,
) -> List[sqlite3.Row]:
    """Execute the stored procedure ``name`` and return its rows.

    ``params`` must supply exactly the parameters the procedure
    declares.  Procedures that return nothing yield an empty list.  The
    call is committed before returning.  Driver errors, including
    integers too large for SQLite, raise ``StorageError``.
    """
    params = dict(params or {})
    try:
        row = conn.execute(
            "SELECT params, body FROM stored_procedures WHERE name = ?",
            (name,),
        ).fetchone()
    except sqlite3.Error as exc:
        raise StorageError(f"Cannot look up procedure {name}: {exc}") from exc
    if row is None:
        raise StorageError(f"Unknown stored procedure {name}")

    declared = [p for p in row["params"].split(",") if p]
    if sorted(declared) != sorted(params):
        raise StorageError(
            f"Procedure {name} expects parameters {declared}, got {sorted(params)}"
        )

    logger.debug("Calling %s with %s", name, params)
    try:
        rows = conn.execute(row["body"], params).fetchall()
        conn.commit()
    except (sqlite3.Error, OverflowError) as exc:
        raise StorageError(f"Procedure {name} failed: {exc}") from exc
    return rows


def init_db(database_url: str) -> None:
    """Create the ``persons`` table and install the stored procedures.

    Safe to run on every start: tables are created only when missing and
    procedure definitions are replaced with the current ones.
    """
    with procedure_connection(database_url) as conn:
        conn.executescript(SCHEMA)
        conn.executemany(
            "INSERT OR REPLACE INTO stored_procedures (name, params, body) VALUES (?, ?, ?)",
            [(name, ",".join(args), body) for name, (args, body) in PROCEDURES.items()],
        )
        conn.commit()
    logger.info("Database ready at %s", get_database_path(database_url))
