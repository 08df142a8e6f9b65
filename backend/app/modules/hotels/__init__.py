# Hotel search module: two interchangeable strategies behind one contract

from .base import AbstractHotelService, HotelStrategy, get_hotel_service
from .unoptimized import UnoptimizedHotelService
from .one_request import OneRequestHotelService

__all__ = [
    "AbstractHotelService", "HotelStrategy", "get_hotel_service",
    "UnoptimizedHotelService", "OneRequestHotelService",
]
