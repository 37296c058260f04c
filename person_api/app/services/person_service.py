"""
Data access for person records.

``PersonService`` turns the five logical operations on persons into
stored-procedure calls and maps result rows to ``Person`` schemas.  It
holds nothing but the connection string: every method opens its own
connection, makes a single procedure call and closes it again.  Nothing
is retried.

The write procedures do not report how many rows they touched, so
``update_person`` and ``delete_person`` succeed silently when the id
does not exist.  Callers that need to know must look the person up
first.
"""

from __future__ import annotations

import logging
import sqlite3
from decimal import Decimal
from typing import List, Optional

from person_api.app.core.db import call_procedure, procedure_connection
from person_api.app.core.errors import StorageError
from person_api.app.schemas.person import Person


logger = logging.getLogger(__name__)


class PersonService:
    """Stored-procedure backed access to the ``persons`` table."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def list_persons(self) -> List[Person]:
        """Return every person, in whatever order ``GetAllPersons`` yields."""
        with procedure_connection(self.database_url) as conn:
            rows = call_procedure(conn, "GetAllPersons")
        logger.debug("Listed %d persons", len(rows))
        return [self._row_to_person(row) for row in rows]

    def get_person_by_id(self, person_id: int) -> Optional[Person]:
        """Return the person with ``person_id`` or ``None``.

        Raises ``StorageError`` if the procedure returns more than one
        row.
        """
        with procedure_connection(self.database_url) as conn:
            rows = call_procedure(conn, "GetPersonById", {"id": person_id})
        if not rows:
            return None
        if len(rows) > 1:
            raise StorageError(
                f"GetPersonById returned {len(rows)} rows for id {person_id}"
            )
        return self._row_to_person(rows[0])

    def add_person(self, person: Person) -> None:
        """Insert ``person``.  A duplicate id raises ``StorageError``."""
        with procedure_connection(self.database_url) as conn:
            call_procedure(
                conn,
                "AddPerson",
                {"id": person.id, "name": person.name, "salary": person.salary},
            )
        logger.info("Added person %s", person.id)

    def update_person(self, person: Person) -> None:
        """Overwrite name and salary of ``person.id``; no-op if absent."""
        with procedure_connection(self.database_url) as conn:
            call_procedure(
                conn,
                "UpdatePerson",
                {"id": person.id, "name": person.name, "salary": person.salary},
            )
        logger.info("Updated person %s", person.id)

    def delete_person(self, person_id: int) -> None:
        """Delete ``person_id``; no-op if absent."""
        with procedure_connection(self.database_url) as conn:
            call_procedure(conn, "DeletePerson", {"id": person_id})
        logger.info("Deleted person %s", person_id)

    @staticmethod
    def _row_to_person(row: sqlite3.Row) -> Person:
        """Convert a database row to a ``Person`` schema instance."""
        return Person(
            id=row["id"],
            name=row["name"],
            salary=Decimal(str(row["salary"])),
        )
