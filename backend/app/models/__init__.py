# Pydantic models for API contracts

from .hotel import Address, Room, Hotel
from .filters import NumericRange, HotelFilters

__all__ = [
    # Entity models
    "Address", "Room", "Hotel",

    # Filter models
    "NumericRange", "HotelFilters",
]
