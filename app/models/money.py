"""
Money - exact monetary amounts in minor currency units.

Design principles:
- Integer minor units only, never floats
- Subtraction may go negative (remaining balance after overpayment)
- Serialises to a plain integer in JSON and MongoDB documents
"""

from functools import total_ordering
from typing import Any

from app.utils.ledger_validation import InvalidAmount


@total_ordering
class Money:
    __slots__ = ("_minor_units",)

    def __init__(self, minor_units: int = 0):
        if isinstance(minor_units, bool) or not isinstance(minor_units, int):
            raise InvalidAmount(f"Money requires integer minor units, got {minor_units!r}")
        self._minor_units = minor_units

    @property
    def minor_units(self) -> int:
        return self._minor_units

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self._minor_units + other._minor_units)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self._minor_units - other._minor_units)

    def __neg__(self) -> "Money":
        return Money(-self._minor_units)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._minor_units == other._minor_units

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._minor_units < other._minor_units

    def __hash__(self) -> int:
        return hash(self._minor_units)

    def __int__(self) -> int:
        return self._minor_units

    def __repr__(self) -> str:
        return f"Money({self._minor_units})"

    def compare(self, other: "Money") -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        return (self._minor_units > other._minor_units) - (self._minor_units < other._minor_units)

    def is_negative(self) -> bool:
        return self._minor_units < 0

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        from pydantic_core import core_schema

        from_int = core_schema.no_info_after_validator_function(
            cls, core_schema.int_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_int,
            python_schema=core_schema.union_schema([
                core_schema.is_instance_schema(cls),
                from_int,
            ]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.minor_units,
                return_schema=core_schema.int_schema()
            ),
        )


def total(amounts) -> Money:
    """Exact sum of an iterable of Money."""
    result = Money.zero()
    for amount in amounts:
        result = result + amount
    return result
