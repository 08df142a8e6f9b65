from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List


class NumericRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)

    @model_validator(mode='after')
    def validate_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError('min must be less than or equal to max')
        return self


class HotelFilters(BaseModel):
    """Search constraints supplied by the caller. Every field is optional."""
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = None  # accepted but not used for filtering yet

    # Geographic filter, active only when all three are set
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    distance: Optional[float] = Field(None, ge=0)  # radius in km

    # Room filters
    price: NumericRange = Field(default_factory=NumericRange)
    surface: NumericRange = Field(default_factory=NumericRange)
    rooms: Optional[int] = Field(None, ge=0)  # minimum bedroom count
    bathrooms: Optional[int] = Field(None, ge=0)
    types: List[str] = []

    @property
    def has_geo_filter(self) -> bool:
        return self.lat is not None and self.lng is not None and self.distance is not None
