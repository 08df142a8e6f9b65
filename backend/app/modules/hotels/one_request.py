from typing import Dict, List

from sqlalchemy import Float, and_, case, cast, func, or_, select
from sqlalchemy.orm import aliased
from sqlalchemy.sql.elements import ColumnElement

from app.db.models import (
    Post, PostMeta, User, UserMeta, HOTEL_META_KEYS, REVIEW_POST_TYPE, ROOM_POST_TYPE, RATING_META_KEY,
)
from app.models.filters import HotelFilters
from app.models.hotel import Hotel
from app.modules.hotels.assembler import assemble_hotel
from app.modules.hotels.base import AbstractHotelService, HotelStrategy
from app.modules.hotels.distance import distance_expression
from app.modules.hotels.predicates import RoomPredicate, apply_predicates, build_room_predicates
from app.modules.hotels.queries import room_source, room_select_columns
import logging

logger = logging.getLogger(__name__)


class OneRequestHotelService(AbstractHotelService):
    """
    Single round trip strategy.

    One grouped statement does the work the unoptimized strategy spreads over
    N+1 queries:

    - a ranked subquery keeps, per hotel, the cheapest room matching every
      room predicate (ties broken by room id)
    - the hotel attributes are pivoted out of wp_usermeta with
      MAX(CASE WHEN meta_key = ... THEN meta_value END)
    - review rating and count come from correlated scalar subqueries
    - the radius check is a HAVING clause, since the hotel coordinates only
      exist once the attribute rows have been grouped
    """

    strategy = HotelStrategy.ONE_REQUEST

    def _list(self, filters: HotelFilters) -> List[Hotel]:
        stmt = self.build_statement(filters)
        with self._track("one_request.query"):
            rows = self.db.execute(stmt).mappings().all()
        return [assemble_hotel(row) for row in rows]

    def build_statement(self, filters: HotelFilters):
        predicates = build_room_predicates(filters)
        cheapest = self._cheapest_room_subquery(predicates)
        metas = self._pivoted_metas()

        room_columns = [
            cheapest.c.room_id,
            cheapest.c.room_title,
            cheapest.c.room_price,
            cheapest.c.room_surface,
            cheapest.c.room_bedrooms,
            cheapest.c.room_bathrooms,
            cheapest.c.room_type,
        ]
        rating, rating_count = self._review_aggregates()

        stmt = (
            select(
                User.ID,
                User.display_name,
                *[expression.label(key) for key, expression in metas.items()],
                rating.label("rating"),
                rating_count.label("rating_count"),
                *room_columns,
            )
            .select_from(User)
            .join(cheapest, and_(cheapest.c.hotel_id == User.ID, cheapest.c.room_rank == 1))
            .outerjoin(UserMeta, UserMeta.user_id == User.ID)
            .group_by(User.ID, User.display_name, *room_columns)
            .order_by(cheapest.c.room_id.asc())
        )

        if filters.has_geo_filter:
            distance = distance_expression(
                filters.lat,
                filters.lng,
                cast(metas["geo_lat"], Float),
                cast(metas["geo_lng"], Float),
            )
            # Hotels without coordinates pass through so the assembler reports them
            stmt = stmt.add_columns(distance.label("distance")).having(
                or_(distance <= filters.distance, distance.is_(None))
            )

        logger.debug(f"Hotel query: {stmt}")
        return stmt

    @staticmethod
    def _cheapest_room_subquery(predicates: List[RoomPredicate]):
        source = room_source()
        room_rank = func.row_number().over(
            partition_by=source.post.post_author,
            order_by=(source.columns.price.asc(), source.post.ID.asc()),
        )
        return (
            select(
                source.post.post_author.label("hotel_id"),
                *room_select_columns(source),
                room_rank.label("room_rank"),
            )
            .select_from(source.from_clause)
            .where(
                source.post.post_type == ROOM_POST_TYPE,
                *apply_predicates(predicates, source.columns),
            )
            .subquery("cheapest_room")
        )

    @staticmethod
    def _pivoted_metas() -> Dict[str, ColumnElement]:
        return {
            key: func.max(case((UserMeta.meta_key == key, UserMeta.meta_value)))
            for key in HOTEL_META_KEYS
        }

    @staticmethod
    def _review_aggregates():
        review_post = aliased(Post, name="review_post")
        review_meta = aliased(PostMeta, name="review_meta")

        def correlated(aggregate: ColumnElement):
            return (
                select(aggregate)
                .select_from(review_post)
                .join(review_meta, review_meta.post_id == review_post.ID)
                .where(
                    review_post.post_author == User.ID,
                    review_post.post_type == REVIEW_POST_TYPE,
                    review_meta.meta_key == RATING_META_KEY,
                )
                .correlate(User)
                .scalar_subquery()
            )

        rating = correlated(func.round(func.avg(cast(review_meta.meta_value, Float))))
        rating_count = correlated(func.count(review_meta.meta_value))
        return rating, rating_count
