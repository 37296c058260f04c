"""
Pydantic schemas for person records.

A person has a caller-assigned integer ``id``, a ``name`` and a
fixed-point ``salary``.  Ids are limited to the signed 64-bit range the
database can store.  Salaries are kept as ``Decimal`` internally and
written to JSON as numbers when that is exact: integers when there is no
fractional part, floats when the float reads back as the same decimal.
Any other salary is written as its exact decimal string.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, field_serializer


ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


def _decimal_to_json(value: Decimal) -> Union[int, float, str]:
    if value.as_tuple().exponent >= 0:
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) == value:
        return as_float
    return str(value)


class Person(BaseModel):
    """A stored person, as created, listed and retrieved."""

    id: int = Field(..., ge=ID_MIN, le=ID_MAX, description="Identifier chosen by the caller on create")
    name: str = Field(..., description="Full name")
    salary: Decimal = Field(..., description="Salary as a fixed-point amount")

    @field_serializer("salary", when_used="json")
    def serialize_salary(self, salary: Decimal) -> Union[int, float, str]:
        return _decimal_to_json(salary)


class PersonUpdate(BaseModel):
    """Body of an update.

    ``id`` is accepted for symmetry with ``Person`` but ignored: the id
    in the URL path always wins.
    """

    id: Optional[int] = None
    name: str
    salary: Decimal
