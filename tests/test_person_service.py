import logging
from decimal import Decimal

import pytest

from person_api.app.core.db import procedure_connection
from person_api.app.core.errors import StorageError
from person_api.app.schemas.person import Person


def make_person(person_id: int, name: str = "Ann", salary: str = "50000") -> Person:
    return Person(id=person_id, name=name, salary=Decimal(salary))


def test_list_is_empty_without_rows(service):
    assert service.list_persons() == []


def test_add_then_get_returns_equal_record(service):
    person = make_person(1, salary="50000.25")
    service.add_person(person)
    assert service.get_person_by_id(1) == person


def test_get_unknown_id_returns_none(service):
    assert service.get_person_by_id(999) is None


def test_delete_then_get_returns_none(service):
    service.add_person(make_person(1))
    service.delete_person(1)
    assert service.get_person_by_id(1) is None


def test_update_overwrites_name_and_salary(service):
    service.add_person(make_person(1))
    service.update_person(make_person(1, name="Ann B", salary="60000"))
    assert service.get_person_by_id(1) == make_person(1, name="Ann B", salary="60000")


def test_update_of_absent_id_is_a_silent_noop(service):
    service.update_person(make_person(42))
    assert service.get_person_by_id(42) is None
    assert service.list_persons() == []


def test_delete_of_absent_id_is_a_silent_noop(service):
    service.add_person(make_person(1))
    service.delete_person(2)
    assert [p.id for p in service.list_persons()] == [1]


def test_list_length_tracks_inserts_minus_deletes(service):
    for person_id in (3, 1, 2, 5):
        service.add_person(make_person(person_id, name=f"P{person_id}"))
    service.delete_person(1)
    service.add_person(make_person(4))
    service.delete_person(5)
    persons = service.list_persons()
    assert len(persons) == 3
    assert {p.id for p in persons} == {2, 3, 4}


def test_duplicate_id_raises_storage_error(service):
    service.add_person(make_person(1))
    with pytest.raises(StorageError):
        service.add_person(make_person(1, name="Other"))
    assert service.get_person_by_id(1).name == "Ann"


def test_more_than_one_row_raises_storage_error(service):
    service.add_person(make_person(1))
    service.add_person(make_person(2))
    # Redefine the procedure in the database so it no longer filters by id.
    with procedure_connection(service.database_url) as conn:
        conn.execute(
            "UPDATE stored_procedures SET body = ? WHERE name = 'GetPersonById'",
            ("SELECT id, name, salary FROM persons WHERE :id IS NOT NULL",),
        )
        conn.commit()
    with pytest.raises(StorageError, match="returned 2 rows"):
        service.get_person_by_id(1)


def test_mutations_are_logged(service, caplog):
    with caplog.at_level(logging.INFO, logger="person_api.app.services.person_service"):
        service.add_person(make_person(1))
        service.update_person(make_person(1, name="Ann B"))
        service.delete_person(1)
    messages = [
        record.getMessage()
        for record in caplog.records
        if record.name == "person_api.app.services.person_service"
        and record.levelno == logging.INFO
    ]
    assert messages == ["Added person 1", "Updated person 1", "Deleted person 1"]
