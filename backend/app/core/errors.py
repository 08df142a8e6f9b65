"""Faults raised by the hotel search engine.

A fault aborts the whole ``list`` call. Hotels that simply do not match the
filters are never reported through these exceptions, see
``app.modules.hotels.outcome`` for that channel.
"""


class HotelSearchError(Exception):
    """Base class for every fault raised while listing hotels"""


class DataStoreError(HotelSearchError):
    """The database could not be reached or rejected a query"""


class MissingAttributeError(HotelSearchError):
    """A hotel is missing one of its required user meta attributes"""

    def __init__(self, hotel_id: int, key: str):
        self.hotel_id = hotel_id
        self.key = key
        super().__init__(f"Hotel {hotel_id} has no '{key}' attribute")


class HotelAssemblyError(HotelSearchError):
    """A result row could not be turned into a Hotel"""
