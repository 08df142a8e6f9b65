from typing import Any, Mapping

from pydantic import ValidationError

from app.core.errors import HotelAssemblyError
from app.models.hotel import Address, Hotel, Room
from app.db.models import ADDRESS_META_KEYS
import logging

logger = logging.getLogger(__name__)


def assemble_room(row: Mapping[str, Any]) -> Room:
    return Room(
        id=row["room_id"],
        title=row["room_title"],
        surface=row["room_surface"],
        price=row["room_price"],
        bedrooms_count=row["room_bedrooms"],
        bathrooms_count=row["room_bathrooms"],
        type=row["room_type"],
    )


def assemble_hotel(row: Mapping[str, Any]) -> Hotel:
    """
    Build a Hotel from a flat result row.

    Both strategies produce the same row shape: the owner columns (``ID``,
    ``display_name``), one column per hotel meta key, ``rating`` and
    ``rating_count``, the ``room_*`` columns and an optional ``distance``.
    A row that does not fit that shape points to a query or schema bug and
    raises HotelAssemblyError.
    """
    try:
        rating = row["rating"]
        return Hotel(
            id=row["ID"],
            name=row["display_name"],
            address=Address(**{key: row[key] for key in ADDRESS_META_KEYS}),
            geo_lat=row["geo_lat"],
            geo_lng=row["geo_lng"],
            image_url=row["coverImage"],
            phone=row["phone"],
            rating=int(rating) if rating is not None else None,
            rating_count=row["rating_count"],
            cheapest_room=assemble_room(row),
            distance=row.get("distance"),
        )
    except KeyError as e:
        logger.error(f"Result row is missing column {e}")
        raise HotelAssemblyError(f"Result row is missing column {e}") from e
    except (ValidationError, TypeError, ValueError) as e:
        logger.error(f"Malformed result row for hotel {row.get('ID')}: {e}")
        raise HotelAssemblyError(f"Malformed result row for hotel {row.get('ID')}") from e
