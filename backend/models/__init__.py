from .calls import CallStatus, InitiateCallResult
from .dates import ResolvedDate
from .reservations import (
    Restaurant,
    ReservationRequest,
    ReservationDetails,
    ReservationCall,
    ReservationResult,
)

__all__ = [
    "CallStatus",
    "InitiateCallResult",
    "ResolvedDate",
    "Restaurant",
    "ReservationRequest",
    "ReservationDetails",
    "ReservationCall",
    "ReservationResult",
]
