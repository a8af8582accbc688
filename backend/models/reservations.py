from typing import Optional
from pydantic import BaseModel, Field


class Restaurant(BaseModel):
    """Restaurant details pulled from Google Places."""

    name: str
    address: Optional[str] = None
    phone_number: Optional[str] = None
    rating: Optional[float] = None
    website: Optional[str] = None
    opening_hours: list[str] = Field(default_factory=list)
    place_id: Optional[str] = None


class ReservationRequest(BaseModel):
    """What the caller asks the restaurant for."""

    restaurant_name: str
    location: str = "near me"
    date: str  # free text: "tomorrow", "next Friday", "Jan 30th"
    time: str
    party_size: int = Field(ge=1)
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    custom_questions: list[str] = Field(default_factory=list)


class ReservationDetails(BaseModel):
    date: str  # the date as spoken on the call
    original_date: str
    day_of_week: Optional[str] = None
    time: str
    party_size: int
    customer_name: str
    customer_phone: str
    custom_questions: list[str] = Field(default_factory=list)


class ReservationCall(BaseModel):
    """A reservation call that Vapi accepted."""

    call_id: str
    status: Optional[str] = None
    phone_number: str
    restaurant_name: str
    reservation_details: ReservationDetails


class ReservationResult(BaseModel):
    """Everything the orchestrator knows once the call is under way."""

    success: bool = True
    restaurant: Restaurant
    call: ReservationCall
    message: str
