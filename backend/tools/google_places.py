"""Google Places lookup for restaurant phone numbers."""

import logging
import os
import re
from typing import Optional

import httpx
from langchain_core.tools import tool

from models.reservations import Restaurant

logger = logging.getLogger(__name__)

PLACES_API_BASE = "https://maps.googleapis.com/maps/api/place"

DETAIL_FIELDS = [
    "name",
    "formatted_address",
    "formatted_phone_number",
    "international_phone_number",
    "opening_hours",
    "rating",
    "website",
]


class PlacesAPIError(Exception):
    """Raised when Places answers with an error status or finds nothing."""


def _get_api_key(api_key: Optional[str] = None) -> str:
    """Get the Places API key (argument, GOOGLE_PLACES_API_KEY, then GOOGLE_MAPS_API_KEY)."""
    key = api_key or os.getenv("GOOGLE_PLACES_API_KEY") or os.getenv("GOOGLE_MAPS_API_KEY")
    if not key:
        raise ValueError("GOOGLE_PLACES_API_KEY not set")
    return key


async def _get_json(client: httpx.AsyncClient, path: str, params: dict) -> tuple[httpx.Response, dict]:
    response = await client.get(f"{PLACES_API_BASE}/{path}", params=params)
    try:
        data = response.json()
    except ValueError:
        data = {}
    return response, data


async def find_restaurant(
    restaurant_name: str,
    location: str = "near me",
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Restaurant:
    """
    Find a restaurant and its phone number.

    Runs a Places text search for "<name> <location>" and fetches details
    for the top hit.

    Args:
        restaurant_name: Name of the restaurant
        location: City, address, or "near me"
        api_key: Places API key; falls back to the environment
        transport: Optional httpx transport (tests)

    Returns:
        Restaurant with address, phone, rating, website and hours
    """
    key = _get_api_key(api_key)

    async with httpx.AsyncClient(timeout=30.0, transport=transport) as client:
        response, data = await _get_json(client, "textsearch/json", {
            "query": f"{restaurant_name} {location}",
            "type": "restaurant",
            "key": key,
        })

        status = data.get("status")
        if status == "ZERO_RESULTS" or (status == "OK" and not data.get("results")):
            raise PlacesAPIError(f'No restaurants found matching "{restaurant_name}" in {location}')
        if not response.is_success or status != "OK":
            raise PlacesAPIError(
                f"Failed to find restaurant: {status} - {data.get('error_message') or 'Unknown error'}"
            )

        place = data["results"][0]
        place_id = place.get("place_id")
        logger.info(f"Places match for {restaurant_name!r}: {place.get('name')} ({place_id})")

        response, data = await _get_json(client, "details/json", {
            "place_id": place_id,
            "fields": ",".join(DETAIL_FIELDS),
            "key": key,
        })

    if not response.is_success or data.get("status") != "OK":
        raise PlacesAPIError(f"Failed to get restaurant details: {data.get('status')}")

    details = data.get("result", {})
    return Restaurant(
        name=details.get("name") or place.get("name") or restaurant_name,
        address=details.get("formatted_address"),
        phone_number=details.get("international_phone_number") or details.get("formatted_phone_number"),
        rating=details.get("rating"),
        website=details.get("website"),
        opening_hours=(details.get("opening_hours") or {}).get("weekday_text", []),
        place_id=place_id,
    )


def format_phone_for_calling(phone_number: str) -> str:
    """Normalize a phone number to E.164, assuming US numbers without a country code."""
    if not phone_number:
        raise ValueError("No phone number provided")

    cleaned = re.sub(r"[^\d+]", "", phone_number)
    if cleaned.startswith("+"):
        return cleaned
    if len(cleaned) == 10:
        return f"+1{cleaned}"
    if len(cleaned) == 11 and cleaned.startswith("1"):
        return f"+{cleaned}"
    raise ValueError(f"Invalid phone number format: {phone_number}")


@tool
async def lookup_restaurant(restaurant_name: str, location: str = "near me") -> dict:
    """
    Look up a restaurant's address and dialable phone number on Google Places.

    Args:
        restaurant_name: Name of the restaurant (e.g., "The French Laundry")
        location: City or address to search around (e.g., "Yountville, CA")

    Returns:
        Restaurant details with an E.164 phone number ready for calling
    """
    try:
        restaurant = await find_restaurant(restaurant_name, location)
    except (PlacesAPIError, ValueError, httpx.HTTPError) as e:
        return {"error": str(e)}

    result = restaurant.model_dump()
    if restaurant.phone_number:
        try:
            result["dial_number"] = format_phone_for_calling(restaurant.phone_number)
        except ValueError:
            result["dial_number"] = None
    return result


google_places_tools = [
    lookup_restaurant,
]
