"""Vapi outbound calls that book restaurant tables."""

import logging
import os
from typing import Optional

from integrations.vapi.assistant_config import build_reservation_assistant
from integrations.vapi.client import VapiClient
from integrations.vapi.prompts import build_reservation_prompt
from lib.dates import resolve_date
from models.calls import CallStatus
from models.reservations import ReservationCall, ReservationDetails

logger = logging.getLogger(__name__)


def get_vapi_client() -> VapiClient:
    """Client configured from VAPI_API_KEY / VAPI_PHONE_NUMBER_ID."""
    api_key = os.getenv("VAPI_API_KEY")
    if not api_key:
        raise ValueError("VAPI_API_KEY not set")
    phone_number_id = os.getenv("VAPI_PHONE_NUMBER_ID")
    if not phone_number_id:
        raise ValueError("VAPI_PHONE_NUMBER_ID not set")
    return VapiClient(api_key=api_key, phone_number_id=phone_number_id)


async def make_reservation_call(
    client: VapiClient,
    phone_number: str,
    restaurant_name: str,
    date: str,
    time: str,
    party_size: int,
    customer_name: str,
    customer_phone: str,
    customer_email: Optional[str] = None,
    custom_questions: Optional[list[str]] = None,
) -> ReservationCall:
    """
    Call a restaurant and ask for a table.

    The date is resolved first so the assistant says "Friday, January 30th"
    rather than "next friday"; unrecognised dates are spoken as given.

    Raises:
        VapiAPIError: Vapi rejected the call
    """
    parsed_date = resolve_date(date)
    date_for_call = parsed_date.formatted if parsed_date.is_valid else date
    if not parsed_date.is_valid:
        logger.info(f"Could not resolve date {date!r}, passing it through")

    system_prompt = build_reservation_prompt(
        date_for_call=date_for_call,
        time=time,
        party_size=party_size,
        customer_name=customer_name,
        customer_phone=customer_phone,
        customer_email=customer_email,
        custom_questions=custom_questions,
    )
    assistant = build_reservation_assistant(system_prompt)

    call_data = await client.create_call(
        assistant,
        customer_number=phone_number,
        customer_name=restaurant_name,
        metadata={"call_type": "reservation", "restaurant_name": restaurant_name},
    )

    return ReservationCall(
        call_id=call_data.get("id", ""),
        status=call_data.get("status"),
        phone_number=phone_number,
        restaurant_name=restaurant_name,
        reservation_details=ReservationDetails(
            date=date_for_call,
            original_date=date,
            day_of_week=parsed_date.day_of_week,
            time=time,
            party_size=party_size,
            customer_name=customer_name,
            customer_phone=customer_phone,
            custom_questions=custom_questions or [],
        ),
    )


async def get_call_status(client: VapiClient, call_id: str) -> CallStatus:
    return await client.get_call(call_id)
