from abc import ABC, abstractmethod
from contextlib import nullcontext
from enum import Enum
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DataStoreError
from app.core.timing import Timers
from app.models.filters import HotelFilters
from app.models.hotel import Hotel
import logging

logger = logging.getLogger(__name__)


class HotelStrategy(str, Enum):
    UNOPTIMIZED = "unoptimized"
    ONE_REQUEST = "one_request"


class AbstractHotelService(ABC):
    """Lists hotels matching a set of filters.

    The session and the optional timers are owned by the caller. Hotels that
    do not match are silently left out; anything else that goes wrong aborts
    the call with a HotelSearchError subclass.
    """

    strategy: HotelStrategy

    def __init__(self, db: Session, timers: Optional[Timers] = None):
        self.db = db
        self.timers = timers

    def list(self, filters: Optional[HotelFilters] = None) -> List[Hotel]:
        filters = filters or HotelFilters()
        try:
            with self._track(f"{self.strategy.value}.list"):
                hotels = self._list(filters)
        except SQLAlchemyError as e:
            logger.error(f"Hotel search failed ({self.strategy.value}): {e}")
            raise DataStoreError(f"Hotel search failed: {e}") from e

        logger.info(f"Found {len(hotels)} hotels using the {self.strategy.value} strategy")
        return hotels

    @abstractmethod
    def _list(self, filters: HotelFilters) -> List[Hotel]:
        ...

    def _track(self, name: str):
        if self.timers is None:
            return nullcontext()
        return self.timers.track(name)


def get_hotel_service(
    strategy: HotelStrategy,
    db: Session,
    timers: Optional[Timers] = None,
) -> AbstractHotelService:
    # Imported here to keep the strategy modules free to import this one
    from app.modules.hotels.one_request import OneRequestHotelService
    from app.modules.hotels.unoptimized import UnoptimizedHotelService

    services = {
        HotelStrategy.UNOPTIMIZED: UnoptimizedHotelService,
        HotelStrategy.ONE_REQUEST: OneRequestHotelService,
    }
    return services[HotelStrategy(strategy)](db, timers)
