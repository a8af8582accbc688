from .google_places import google_places_tools
from .reservations import reservation_tools

ALL_TOOLS = google_places_tools + reservation_tools

__all__ = [
    "google_places_tools",
    "reservation_tools",
    "ALL_TOOLS",
]
