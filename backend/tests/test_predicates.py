import pytest
from sqlalchemy import column

from app.models.filters import HotelFilters, NumericRange
from app.modules.hotels.predicates import (
    RoomColumns, RoomPredicate, apply_predicates, build_room_predicates,
    SURFACE, PRICE, BEDROOMS, BATHROOMS, TYPE, GTE, LTE, IN,
)


@pytest.fixture
def columns():
    return RoomColumns(
        surface=column("surface"),
        price=column("price"),
        bedrooms=column("bedrooms"),
        bathrooms=column("bathrooms"),
        type=column("type"),
    )


class TestBuildRoomPredicates:
    """Test which predicates a filter object turns into"""

    def test_no_filters_no_predicates(self):
        assert build_room_predicates(HotelFilters()) == []

    def test_every_filter_in_fixed_order(self):
        filters = HotelFilters(
            surface=NumericRange(min=15, max=40),
            price=NumericRange(min=50, max=1000),
            rooms=2,
            bathrooms=1,
            types=["Suite", "Chambre double"],
        )

        predicates = build_room_predicates(filters)

        assert predicates == [
            RoomPredicate(SURFACE, GTE, 15),
            RoomPredicate(SURFACE, LTE, 40),
            RoomPredicate(PRICE, GTE, 50),
            RoomPredicate(PRICE, LTE, 1000),
            RoomPredicate(BEDROOMS, GTE, 2),
            RoomPredicate(BATHROOMS, GTE, 1),
            RoomPredicate(TYPE, IN, ("Suite", "Chambre double")),
        ]

    def test_single_bound(self):
        predicates = build_room_predicates(HotelFilters(price=NumericRange(max=1000)))
        assert predicates == [RoomPredicate(PRICE, LTE, 1000)]

    def test_zero_is_a_bound(self):
        """A zero minimum is still a constraint, not a missing value"""
        predicates = build_room_predicates(HotelFilters(price=NumericRange(min=0), rooms=0))
        assert predicates == [RoomPredicate(PRICE, GTE, 0), RoomPredicate(BEDROOMS, GTE, 0)]

    def test_empty_types_is_no_constraint(self):
        assert build_room_predicates(HotelFilters(types=[])) == []

    def test_geo_and_search_do_not_touch_rooms(self):
        filters = HotelFilters(search="spa", lat=48.85, lng=2.35, distance=5)
        assert build_room_predicates(filters) == []


class TestRoomPredicateClauses:
    """Test rendering predicates into SQL clauses"""

    def test_comparison_uses_bound_parameters(self, columns):
        clause = RoomPredicate(PRICE, LTE, 1000).to_clause(columns)
        compiled = clause.compile()

        assert str(compiled) == "price <= :price_1"
        assert compiled.params == {"price_1": 1000}

    def test_greater_or_equal(self, columns):
        clause = RoomPredicate(SURFACE, GTE, 20).to_clause(columns)
        assert str(clause.compile()) == "surface >= :surface_1"

    def test_type_membership_is_parameterized(self, columns):
        hostile = "x\") OR 1=1 --"
        clause = RoomPredicate(TYPE, IN, ("Suite", hostile)).to_clause(columns)
        compiled = clause.compile()

        assert hostile not in str(compiled)
        assert ["Suite", hostile] in compiled.params.values()

    def test_unknown_operator(self, columns):
        with pytest.raises(ValueError):
            RoomPredicate(PRICE, "!=", 3).to_clause(columns)

    def test_apply_predicates_keeps_order(self, columns):
        predicates = build_room_predicates(HotelFilters(rooms=2, bathrooms=1))
        clauses = apply_predicates(predicates, columns)

        assert [str(c.compile()) for c in clauses] == [
            "bedrooms >= :bedrooms_1",
            "bathrooms >= :bathrooms_1",
        ]
