from typing import Any, NamedTuple

from sqlalchemy import Float, Integer, and_, cast
from sqlalchemy.orm import aliased, join
from sqlalchemy.sql.expression import FromClause

from app.db.models import (
    Post, PostMeta, PRICE_META_KEY, SURFACE_META_KEY, TYPE_META_KEY,
    BEDROOMS_META_KEY, BATHROOMS_META_KEY,
)
from app.modules.hotels.predicates import RoomColumns


class RoomSource(NamedTuple):
    post: Any
    columns: RoomColumns
    from_clause: FromClause


def room_source() -> RoomSource:
    """Room posts inner-joined with their five attribute rows.

    Meta values are stored as text, so numeric attributes are cast before
    they are compared or ordered. A room missing any attribute drops out.
    """
    post = aliased(Post, name="room_post")
    price = aliased(PostMeta, name="price_data")
    surface = aliased(PostMeta, name="surface_data")
    room_type = aliased(PostMeta, name="type_data")
    bedrooms = aliased(PostMeta, name="bedrooms_data")
    bathrooms = aliased(PostMeta, name="bathrooms_data")

    from_clause = (
        join(post, price, and_(price.post_id == post.ID, price.meta_key == PRICE_META_KEY))
        .join(surface, and_(surface.post_id == post.ID, surface.meta_key == SURFACE_META_KEY))
        .join(room_type, and_(room_type.post_id == post.ID, room_type.meta_key == TYPE_META_KEY))
        .join(bedrooms, and_(bedrooms.post_id == post.ID, bedrooms.meta_key == BEDROOMS_META_KEY))
        .join(bathrooms, and_(bathrooms.post_id == post.ID, bathrooms.meta_key == BATHROOMS_META_KEY))
    )

    columns = RoomColumns(
        surface=cast(surface.meta_value, Float),
        price=cast(price.meta_value, Float),
        bedrooms=cast(bedrooms.meta_value, Integer),
        bathrooms=cast(bathrooms.meta_value, Integer),
        type=room_type.meta_value,
    )
    return RoomSource(post=post, columns=columns, from_clause=from_clause)


def room_select_columns(source: RoomSource) -> list:
    """Room columns labelled with the keys the assembler expects"""
    return [
        source.post.ID.label("room_id"),
        source.post.post_title.label("room_title"),
        source.columns.price.label("room_price"),
        source.columns.surface.label("room_surface"),
        source.columns.bedrooms.label("room_bedrooms"),
        source.columns.bathrooms.label("room_bathrooms"),
        source.columns.type.label("room_type"),
    ]
