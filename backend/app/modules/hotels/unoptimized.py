from typing import Any, Dict, List, Sequence

from sqlalchemy import select

from app.core.errors import HotelAssemblyError
from app.db.models import User
from app.models.filters import HotelFilters
from app.models.hotel import Hotel
from app.modules.hotels.assembler import assemble_hotel
from app.modules.hotels.base import AbstractHotelService, HotelStrategy
from app.modules.hotels.distance import compute_distance
from app.modules.hotels.metadata import (
    fetch_cheapest_room, fetch_hotel_metas, fetch_reviews,
)
from app.modules.hotels.outcome import Accepted, Outcome, Rejected, RejectionReason
from app.modules.hotels.predicates import RoomPredicate, build_room_predicates
import logging

logger = logging.getLogger(__name__)


class UnoptimizedHotelService(AbstractHotelService):
    """
    Baseline strategy: load every hotel owner, then enrich them one by one.

    Each hotel costs three extra queries (attributes, reviews, cheapest room)
    and the radius check runs in Python once the coordinates are known.
    """

    strategy = HotelStrategy.UNOPTIMIZED

    def _list(self, filters: HotelFilters) -> List[Hotel]:
        predicates = build_room_predicates(filters)

        with self._track("fetch_owners"):
            owners = self.db.execute(
                select(User.ID, User.display_name).order_by(User.ID)
            ).mappings().all()

        hotels = []
        for owner in owners:
            outcome = self.evaluate(dict(owner), filters, predicates)
            if isinstance(outcome, Rejected):
                logger.debug(f"Hotel {outcome.hotel_id} rejected: {outcome.reason.value} ({outcome.detail})")
                continue
            hotels.append(outcome.hotel)

        # Same tie-break order as the single query strategy
        return sorted(hotels, key=lambda hotel: hotel.cheapest_room.id)

    def evaluate(
        self,
        owner: Dict[str, Any],
        filters: HotelFilters,
        predicates: Sequence[RoomPredicate],
    ) -> Outcome:
        """Run the per-hotel lookups and decide whether the hotel is kept"""
        hotel_id = owner["ID"]
        row = dict(owner)

        with self._track("fetch_metas"):
            row.update(fetch_hotel_metas(self.db, hotel_id))

        with self._track("fetch_reviews"):
            reviews = fetch_reviews(self.db, hotel_id)
        row["rating"] = reviews.rating
        row["rating_count"] = reviews.count

        with self._track("fetch_cheapest_room"):
            room = fetch_cheapest_room(self.db, hotel_id, predicates)
        if isinstance(room, Rejected):
            return room
        row.update(room)

        if filters.has_geo_filter:
            try:
                lat, lng = float(row["geo_lat"]), float(row["geo_lng"])
            except ValueError as e:
                raise HotelAssemblyError(f"Hotel {hotel_id} has invalid coordinates") from e
            distance = compute_distance(filters.lat, filters.lng, lat, lng)
            if distance > filters.distance:
                return Rejected(
                    hotel_id=hotel_id,
                    reason=RejectionReason.OUT_OF_RADIUS,
                    detail=f"{distance:.3f} km from the search point, radius is {filters.distance} km",
                )
            row["distance"] = distance

        return Accepted(assemble_hotel(row))
