"""
Person endpoints for API v1.

Each route is a thin pass-through to ``PersonService``.  Update and
delete look the person up before writing, because the underlying
stored procedures do not report whether any row was affected: when the
lookup finds nothing the route answers 404 and the write procedure is
never called.

Routes are plain functions; FastAPI runs them in its thread pool, so a
slow database call only blocks its own request.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Request, Response, status

from person_api.app.core.errors import NotFound
from person_api.app.schemas.person import ID_MAX, ID_MIN, Person, PersonUpdate
from person_api.app.services.person_service import PersonService

router = APIRouter()


def get_person_service(request: Request) -> PersonService:
    """Return the service attached to the application by ``create_app``."""
    return request.app.state.person_service


@router.get("", response_model=List[Person])
def list_persons(service: PersonService = Depends(get_person_service)) -> List[Person]:
    """Return all persons; an empty list when there are none."""
    return service.list_persons()


@router.get("/{person_id}", response_model=Person)
def get_person(
    person_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    service: PersonService = Depends(get_person_service),
) -> Person:
    """Retrieve a single person.  404 with an empty body if unknown."""
    person = service.get_person_by_id(person_id)
    if person is None:
        raise NotFound(person_id)
    return person


@router.post("", response_model=Person, status_code=status.HTTP_201_CREATED)
def create_person(
    person: Person,
    request: Request,
    response: Response,
    service: PersonService = Depends(get_person_service),
) -> Person:
    """Store a new person under the id given in the body.

    The ``Location`` header points at the list endpoint with the new id
    as a query parameter.  A duplicate id is rejected by the database and
    surfaces as a 500.
    """
    service.add_person(person)
    response.headers["Location"] = str(
        request.url_for("list_persons").include_query_params(id=person.id)
    )
    return person


@router.put("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_person(
    person_in: PersonUpdate,
    person_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    service: PersonService = Depends(get_person_service),
) -> Response:
    """Replace name and salary of an existing person."""
    if service.get_person_by_id(person_id) is None:
        raise NotFound(person_id)
    service.update_person(
        Person(id=person_id, name=person_in.name, salary=person_in.salary)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_person(
    person_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    service: PersonService = Depends(get_person_service),
) -> Response:
    """Remove an existing person."""
    if service.get_person_by_id(person_id) is None:
        raise NotFound(person_id)
    service.delete_person(person_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
