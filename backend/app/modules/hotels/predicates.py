"""Translate HotelFilters into room predicates shared by both strategies.

The builder only decides *which* constraints apply. Each strategy supplies
the SQL columns the constraints are rendered against, so the per-hotel
lookup and the single grouped query always filter with the same semantics.
"""
from dataclasses import dataclass
from typing import Any, List, NamedTuple, Sequence

from sqlalchemy.sql.elements import ColumnElement

from app.models.filters import HotelFilters
import logging

logger = logging.getLogger(__name__)

SURFACE = "surface"
PRICE = "price"
BEDROOMS = "bedrooms"
BATHROOMS = "bathrooms"
TYPE = "type"

GTE = ">="
LTE = "<="
IN = "in"


class RoomColumns(NamedTuple):
    """Typed SQL expressions for the room attributes a predicate can target"""
    surface: ColumnElement
    price: ColumnElement
    bedrooms: ColumnElement
    bathrooms: ColumnElement
    type: ColumnElement


@dataclass(frozen=True)
class RoomPredicate:
    field: str
    operator: str
    value: Any

    def to_clause(self, columns: RoomColumns) -> ColumnElement:
        column = getattr(columns, self.field)
        if self.operator == GTE:
            return column >= self.value
        if self.operator == LTE:
            return column <= self.value
        if self.operator == IN:
            return column.in_(list(self.value))
        raise ValueError(f"Unsupported operator: {self.operator}")

    def __str__(self) -> str:
        return f"{self.field} {self.operator} {self.value!r}"


def build_room_predicates(filters: HotelFilters) -> List[RoomPredicate]:
    """Build the AND-ed room constraints for ``filters``, in a fixed order"""
    predicates: List[RoomPredicate] = []

    if filters.surface.min is not None:
        predicates.append(RoomPredicate(SURFACE, GTE, filters.surface.min))
    if filters.surface.max is not None:
        predicates.append(RoomPredicate(SURFACE, LTE, filters.surface.max))

    if filters.price.min is not None:
        predicates.append(RoomPredicate(PRICE, GTE, filters.price.min))
    if filters.price.max is not None:
        predicates.append(RoomPredicate(PRICE, LTE, filters.price.max))

    if filters.rooms is not None:
        predicates.append(RoomPredicate(BEDROOMS, GTE, filters.rooms))
    if filters.bathrooms is not None:
        predicates.append(RoomPredicate(BATHROOMS, GTE, filters.bathrooms))

    # An empty list means "any type", never "no type"
    if filters.types:
        predicates.append(RoomPredicate(TYPE, IN, tuple(filters.types)))

    logger.debug(f"Room predicates: {[str(p) for p in predicates]}")
    return predicates


def apply_predicates(predicates: Sequence[RoomPredicate], columns: RoomColumns) -> List[ColumnElement]:
    return [predicate.to_clause(columns) for predicate in predicates]
