"""Helpers that write hotels, rooms and reviews in the WordPress key/value layout.

Used by the test suite and by demo_strategies.py. Not part of the search path.
"""
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from app.db.models import (
    User, UserMeta, Post, PostMeta, ROOM_POST_TYPE, REVIEW_POST_TYPE, PRICE_META_KEY,
    SURFACE_META_KEY, TYPE_META_KEY, BEDROOMS_META_KEY, BATHROOMS_META_KEY, RATING_META_KEY,
)


def create_hotel(
    db: Session,
    name: str,
    geo_lat: float = 48.8566,
    geo_lng: float = 2.3522,
    hotel_id: Optional[int] = None,
    **overrides: Optional[str],
) -> User:
    """Create a hotel owner with every required attribute.

    ``overrides`` replaces attribute values; passing ``None`` for a key
    leaves that attribute out entirely.
    """
    hotel = User(ID=hotel_id, user_login=name.lower().replace(" ", "-"), display_name=name)
    db.add(hotel)
    db.flush()

    metas: Dict[str, Optional[str]] = {
        "address_1": "1 rue de la Paix",
        "address_2": "",
        "address_city": "Paris",
        "address_zip": "75002",
        "address_country": "France",
        "geo_lat": str(geo_lat),
        "geo_lng": str(geo_lng),
        "coverImage": f"https://images.example.com/{hotel.ID}.jpg",
        "phone": "+33 1 23 45 67 89",
    }
    metas.update(overrides)
    for key, value in metas.items():
        if value is not None:
            db.add(UserMeta(user_id=hotel.ID, meta_key=key, meta_value=value))
    db.flush()
    return hotel


def create_room(
    db: Session,
    hotel: User,
    price: float,
    surface: float = 20,
    bedrooms: int = 1,
    bathrooms: int = 1,
    room_type: str = "Chambre double",
    title: Optional[str] = None,
) -> Post:
    room = Post(
        post_author=hotel.ID,
        post_title=title if title is not None else f"{room_type} - {price}",
        post_type=ROOM_POST_TYPE,
    )
    db.add(room)
    db.flush()
    _add_post_metas(db, room, {
        PRICE_META_KEY: _format_number(price),
        SURFACE_META_KEY: _format_number(surface),
        TYPE_META_KEY: room_type,
        BEDROOMS_META_KEY: str(bedrooms),
        BATHROOMS_META_KEY: str(bathrooms),
    })
    return room


def create_reviews(db: Session, hotel: User, ratings: Iterable[int]) -> None:
    for rating in ratings:
        review = Post(post_author=hotel.ID, post_title="Review", post_type=REVIEW_POST_TYPE)
        db.add(review)
        db.flush()
        _add_post_metas(db, review, {RATING_META_KEY: str(rating)})


def _add_post_metas(db: Session, post: Post, metas: Dict[str, str]) -> None:
    for key, value in metas.items():
        db.add(PostMeta(post_id=post.ID, meta_key=key, meta_value=value))
    db.flush()


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
