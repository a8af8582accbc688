"""Restaurant reservation orchestrator: look the restaurant up, then call it."""

import logging
from typing import Optional

import httpx
from langchain_core.tools import tool

from integrations.vapi.client import VapiAPIError, VapiClient
from models.calls import CallStatus
from models.reservations import ReservationRequest, ReservationResult
from tools.google_places import PlacesAPIError, find_restaurant, format_phone_for_calling
from tools.vapi_calls import get_call_status, get_vapi_client, make_reservation_call

logger = logging.getLogger(__name__)


async def make_reservation(
    request: ReservationRequest,
    client: VapiClient,
    places_api_key: Optional[str] = None,
    places_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ReservationResult:
    """
    Find the restaurant on Google Places and have the voice assistant call it.

    Args:
        request: Restaurant, date/time, party size and who the table is for
        client: Vapi client used to place the call
        places_api_key: Places API key; falls back to the environment
        places_transport: Optional httpx transport for the Places requests (tests)

    Returns:
        ReservationResult once the call has been queued. The booking itself
        happens on the call; poll the call status for the outcome.
    """
    logger.info(f"Looking up {request.restaurant_name!r} in {request.location!r}")
    try:
        restaurant = await find_restaurant(
            request.restaurant_name,
            request.location,
            api_key=places_api_key,
            transport=places_transport,
        )
    except Exception as e:
        logger.error(f"Failed to find restaurant: {e}")
        raise

    logger.info(
        f"Found {restaurant.name} at {restaurant.address} "
        f"(phone: {restaurant.phone_number}, rating: {restaurant.rating})"
    )

    if not restaurant.phone_number:
        raise ValueError("Restaurant phone number not available")

    dial_number = format_phone_for_calling(restaurant.phone_number)

    logger.info(
        f"Calling {restaurant.name} at {dial_number} for {request.party_size} "
        f"on {request.date} at {request.time} (name: {request.customer_name})"
    )
    try:
        call = await make_reservation_call(
            client,
            phone_number=dial_number,
            restaurant_name=restaurant.name,
            date=request.date,
            time=request.time,
            party_size=request.party_size,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_email=request.customer_email,
            custom_questions=request.custom_questions,
        )
    except Exception as e:
        logger.error(f"Failed to initiate call: {e}")
        raise

    logger.info(f"Call initiated: id={call.call_id} status={call.status}")

    return ReservationResult(
        restaurant=restaurant,
        call=call,
        message=(
            f"Call initiated to {restaurant.name}. The AI assistant is now calling to make your "
            f"reservation for {request.party_size} people on {call.reservation_details.date} "
            f"at {request.time}."
        ),
    )


async def check_reservation_status(client: VapiClient, call_id: str) -> CallStatus:
    """Current status of a reservation call, with transcript and summary once it ends."""
    status = await get_call_status(client, call_id)
    logger.info(
        f"Call {call_id}: status={status.status} duration={status.duration} "
        f"ended_reason={status.ended_reason}"
    )
    return status


@tool
async def reserve_restaurant(
    restaurant_name: str,
    date: str,
    time: str,
    party_size: int,
    customer_name: str,
    customer_phone: str,
    location: str = "near me",
    customer_email: Optional[str] = None,
    custom_questions: Optional[list[str]] = None,
) -> dict:
    """
    Book a table by phoning the restaurant with the AI voice assistant.
    Looks the restaurant up on Google Places, then places the call through Vapi.

    Args:
        restaurant_name: Name of the restaurant (e.g., "The French Laundry")
        date: Reservation date as the user said it (e.g., "tomorrow", "Friday", "Jan 30")
        time: Reservation time (e.g., "7:30 PM")
        party_size: Number of people
        customer_name: Name the reservation is under
        customer_phone: Callback number for the reservation
        location: City or address to search around (default "near me")
        customer_email: Optional email to give if the restaurant asks
        custom_questions: Extra questions to ask once the table is confirmed

    Returns:
        Restaurant, call ID and the reservation details as spoken on the call
    """
    try:
        request = ReservationRequest(
            restaurant_name=restaurant_name,
            location=location,
            date=date,
            time=time,
            party_size=party_size,
            customer_name=customer_name,
            customer_phone=customer_phone,
            customer_email=customer_email,
            custom_questions=custom_questions or [],
        )
        result = await make_reservation(request, get_vapi_client())
    except (PlacesAPIError, VapiAPIError, ValueError, httpx.HTTPError) as e:
        return {"success": False, "error": str(e)}

    payload = result.model_dump(mode="json")
    payload["tip"] = f'Check the call later with check_reservation_call and call_id "{result.call.call_id}"'
    return payload


@tool
async def check_reservation_call(call_id: str) -> dict:
    """
    Get the status of a reservation call, including the transcript and summary once it has ended.

    Args:
        call_id: The Vapi call ID returned by reserve_restaurant

    Returns:
        Call status, duration, end reason, transcript, summary and recording URL
    """
    try:
        status = await check_reservation_status(get_vapi_client(), call_id)
    except (VapiAPIError, ValueError, httpx.HTTPError) as e:
        return {"success": False, "error": str(e)}
    return {"success": True, **status.model_dump()}


reservation_tools = [
    reserve_restaurant,
    check_reservation_call,
]
