from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional


class Address(BaseModel):
    model_config = ConfigDict(frozen=True)

    address_1: str
    address_2: str
    address_city: str
    address_zip: str
    address_country: str


class Room(BaseModel):
    """Cheapest room of a hotel that satisfies the active filters"""
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    surface: float = Field(..., ge=0)
    price: float = Field(..., ge=0)
    bedrooms_count: int = Field(..., ge=0)
    bathrooms_count: int = Field(..., ge=0)
    type: str


class Hotel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    address: Address
    geo_lat: float = Field(..., ge=-90, le=90)
    geo_lng: float = Field(..., ge=-180, le=180)
    image_url: str
    phone: str
    rating: Optional[int] = Field(None, ge=0, le=5)
    rating_count: int = Field(..., ge=0)
    cheapest_room: Room
    distance: Optional[float] = Field(None, ge=0)  # km from the search point, geo searches only

    @model_validator(mode='after')
    def validate_rating(self):
        if (self.rating is None) != (self.rating_count == 0):
            raise ValueError('rating must be null exactly when there are no reviews')
        return self
