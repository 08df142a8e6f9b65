from dataclasses import dataclass
from enum import Enum
from typing import Union

from app.models.hotel import Hotel


class RejectionReason(str, Enum):
    NO_MATCHING_ROOM = "no_matching_room"
    OUT_OF_RADIUS = "out_of_radius"


@dataclass(frozen=True)
class Accepted:
    hotel: Hotel


@dataclass(frozen=True)
class Rejected:
    """A hotel that legitimately does not match the filters. Not an error."""
    hotel_id: int
    reason: RejectionReason
    detail: str = ""


Outcome = Union[Accepted, Rejected]
