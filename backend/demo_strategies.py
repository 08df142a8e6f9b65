#!/usr/bin/env python3
"""
Demo script comparing the two hotel search strategies on the same data
"""
import argparse
import random

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.core.timing import Timers
from app.db.seed import create_hotel, create_room, create_reviews
from app.models.filters import HotelFilters, NumericRange
from app.modules.hotels import HotelStrategy, get_hotel_service

ROOM_TYPES = ["Chambre simple", "Chambre double", "Suite", "Appartement"]


def seed(session, hotel_count: int, rng: random.Random):
    """Create ``hotel_count`` hotels around Paris with a handful of rooms and reviews each"""
    for index in range(hotel_count):
        hotel = create_hotel(
            session,
            f"Hotel {index + 1}",
            geo_lat=48.8566 + rng.uniform(-0.5, 0.5),
            geo_lng=2.3522 + rng.uniform(-0.5, 0.5),
        )
        for _ in range(rng.randint(1, 6)):
            create_room(
                session,
                hotel,
                price=rng.randint(40, 400),
                surface=rng.randint(10, 90),
                bedrooms=rng.randint(1, 4),
                bathrooms=rng.randint(1, 2),
                room_type=rng.choice(ROOM_TYPES),
            )
        create_reviews(session, hotel, [rng.randint(1, 5) for _ in range(rng.randint(0, 8))])
    session.commit()


def run(session, strategy: HotelStrategy, filters: HotelFilters, query_counter: dict):
    timers = Timers()
    query_counter["count"] = 0
    hotels = get_hotel_service(strategy, session, timers).list(filters)

    print(f"\n=== Strategy: {strategy.value} ===")
    print(f"Hotels found: {len(hotels)}")
    print(f"SQL statements: {query_counter['count']}")
    for name, stats in timers.summary().items():
        print(f"  {name}: {stats['count']} call(s), {stats['total_ms']} ms")
    return hotels


def main():
    parser = argparse.ArgumentParser(description="Compare hotel search strategies")
    parser.add_argument("--hotels", type=int, default=200, help="Number of hotels to generate")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--max-price", type=float, default=250)
    parser.add_argument("--radius", type=float, default=30, help="Radius in km around Paris")
    args = parser.parse_args()

    engine = create_engine("sqlite://", poolclass=StaticPool)
    query_counter = {"count": 0}

    @event.listens_for(engine, "before_cursor_execute")
    def count_queries(conn, cursor, statement, parameters, context, executemany):
        query_counter["count"] += 1

    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()

    try:
        seed(session, args.hotels, random.Random(args.seed))
        filters = HotelFilters(
            lat=48.8566,
            lng=2.3522,
            distance=args.radius,
            price=NumericRange(max=args.max_price),
            rooms=1,
        )

        slow = run(session, HotelStrategy.UNOPTIMIZED, filters, query_counter)
        fast = run(session, HotelStrategy.ONE_REQUEST, filters, query_counter)

        same = [(h.id, h.cheapest_room.id) for h in slow] == [(h.id, h.cheapest_room.id) for h in fast]
        print(f"\nStrategies agree: {same}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
