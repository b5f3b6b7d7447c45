"""
Filter specifications for repository queries.

A small, storage-agnostic vocabulary (field/operator/value conditions plus
conjunction and disjunction) that compiles to SQLAlchemy clauses. Queries
travel as data rather than as arbitrary callables.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Type, Union

from sqlalchemy import and_, false, inspect, or_, true
from sqlalchemy.sql.elements import ColumnElement


class InvalidFilterError(ValueError):
    """Raised when a filter cannot be compiled against a model."""


class Operator(str, Enum):
    """Comparison operators supported by Condition."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    CONTAINS = "contains"


def _column(model: Type[Any], field: str):
    columns = inspect(model).columns
    if field not in columns:
        raise InvalidFilterError(f"Unknown field '{field}' for {model.__name__}")
    return getattr(model, field)


@dataclass(frozen=True)
class Condition:
    """A single `field <operator> value` test."""

    field: str
    operator: Operator
    value: Any

    def to_clause(self, model: Type[Any]) -> ColumnElement[bool]:
        column = _column(model, self.field)

        if self.operator is Operator.CONTAINS:
            if not isinstance(self.value, str):
                raise InvalidFilterError(
                    f"CONTAINS requires a string value, got {type(self.value).__name__}"
                )
            return column.contains(self.value, autoescape=True)
        if self.operator is Operator.EQ:
            return column == self.value
        if self.operator is Operator.NE:
            return column != self.value
        if self.operator is Operator.LT:
            return column < self.value
        if self.operator is Operator.LE:
            return column <= self.value
        if self.operator is Operator.GT:
            return column > self.value
        if self.operator is Operator.GE:
            return column >= self.value

        raise InvalidFilterError(f"Unsupported operator: {self.operator!r}")


class AllOf:
    """Conjunction of specifications. Matches everything when empty."""

    def __init__(self, *specs: "FilterSpec"):
        self.specs: Tuple["FilterSpec", ...] = specs

    def to_clause(self, model: Type[Any]) -> ColumnElement[bool]:
        if not self.specs:
            return true()
        return and_(*(spec.to_clause(model) for spec in self.specs))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AllOf) and self.specs == other.specs

    def __repr__(self) -> str:
        return f"AllOf{self.specs!r}"


class AnyOf:
    """Disjunction of specifications. Matches nothing when empty."""

    def __init__(self, *specs: "FilterSpec"):
        self.specs: Tuple["FilterSpec", ...] = specs

    def to_clause(self, model: Type[Any]) -> ColumnElement[bool]:
        if not self.specs:
            return false()
        return or_(*(spec.to_clause(model) for spec in self.specs))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AnyOf) and self.specs == other.specs

    def __repr__(self) -> str:
        return f"AnyOf{self.specs!r}"


FilterSpec = Union[Condition, AllOf, AnyOf]

__all__ = [
    "AllOf",
    "AnyOf",
    "Condition",
    "FilterSpec",
    "InvalidFilterError",
    "Operator",
]
