"""Per-hotel lookups used by the unoptimized strategy.

Each function issues its own query against the session it is given, which is
what makes that strategy N+1 by construction.
"""
from typing import Any, Dict, NamedTuple, Optional, Sequence, Union

from sqlalchemy import Float, cast, func, select
from sqlalchemy.orm import Session

from app.core.errors import MissingAttributeError
from app.db.models import (
    Post, PostMeta, UserMeta, HOTEL_META_KEYS, REVIEW_POST_TYPE, ROOM_POST_TYPE, RATING_META_KEY,
)
from app.modules.hotels.outcome import Rejected, RejectionReason
from app.modules.hotels.predicates import RoomPredicate, apply_predicates
from app.modules.hotels.queries import room_source, room_select_columns
import logging

logger = logging.getLogger(__name__)


class ReviewStats(NamedTuple):
    rating: Optional[int]
    count: int


def fetch_meta(db: Session, hotel_id: int) -> Dict[str, str]:
    """Return every user meta row of a hotel as a key -> value mapping"""
    stmt = select(UserMeta.meta_key, UserMeta.meta_value).where(UserMeta.user_id == hotel_id)
    return {key: value for key, value in db.execute(stmt)}


def fetch_hotel_metas(db: Session, hotel_id: int) -> Dict[str, str]:
    """Return the required hotel attributes, failing loudly if one is absent"""
    data = fetch_meta(db, hotel_id)
    metas = {}
    for key in HOTEL_META_KEYS:
        if key not in data:
            logger.error(f"Hotel {hotel_id} is missing required attribute '{key}'")
            raise MissingAttributeError(hotel_id, key)
        metas[key] = data[key]
    return metas


def fetch_reviews(db: Session, hotel_id: int) -> ReviewStats:
    """Rounded average rating and number of reviews of a hotel"""
    stmt = (
        select(
            func.round(func.avg(cast(PostMeta.meta_value, Float))).label("rating"),
            func.count(PostMeta.meta_value).label("review_count"),
        )
        .select_from(Post)
        .join(PostMeta, PostMeta.post_id == Post.ID)
        .where(
            Post.post_author == hotel_id,
            Post.post_type == REVIEW_POST_TYPE,
            PostMeta.meta_key == RATING_META_KEY,
        )
    )
    row = db.execute(stmt).one()
    count = int(row.review_count or 0)
    if count == 0:
        return ReviewStats(rating=None, count=0)
    return ReviewStats(rating=int(row.rating), count=count)


def fetch_cheapest_room(
    db: Session,
    hotel_id: int,
    predicates: Sequence[RoomPredicate],
) -> Union[Dict[str, Any], Rejected]:
    """Cheapest room of a hotel matching every predicate, as a raw row.

    Equal prices are broken by room id. When no room qualifies the hotel as
    a whole is rejected, which is reported as a ``Rejected`` outcome.
    """
    source = room_source()
    stmt = (
        select(*room_select_columns(source))
        .select_from(source.from_clause)
        .where(
            source.post.post_author == hotel_id,
            source.post.post_type == ROOM_POST_TYPE,
            *apply_predicates(predicates, source.columns),
        )
        .order_by(source.columns.price.asc(), source.post.ID.asc())
        .limit(1)
    )
    row = db.execute(stmt).mappings().first()
    if row is None:
        return Rejected(
            hotel_id=hotel_id,
            reason=RejectionReason.NO_MATCHING_ROOM,
            detail="No room matches the search criteria",
        )
    return dict(row)
