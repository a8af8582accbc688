"""Thin async client for the Vapi outbound calling API."""

import asyncio
import logging
import time
from typing import Optional

import httpx

from models.calls import CallStatus

logger = logging.getLogger(__name__)

VAPI_API_URL = "https://api.vapi.ai"


class VapiAPIError(Exception):
    """Raised when Vapi answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class VapiClient:
    """Places outbound calls from a single Vapi phone number and reads them back."""

    def __init__(
        self,
        api_key: str,
        phone_number_id: Optional[str],
        base_url: str = VAPI_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.phone_number_id = phone_number_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def create_call(
        self,
        assistant: dict,
        customer_number: str,
        customer_name: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> dict:
        """
        Start an outbound call with a transient assistant.

        Args:
            assistant: Full assistant config (model, voice, prompts)
            customer_number: Number to dial, E.164
            customer_name: Optional name shown in the Vapi dashboard
            metadata: Optional metadata echoed back in webhooks

        Returns:
            The created call object from Vapi
        """
        customer = {"number": customer_number}
        if customer_name:
            customer["name"] = customer_name

        payload = {
            "phoneNumberId": self.phone_number_id,
            "assistant": assistant,
            "customer": customer,
        }
        if metadata:
            payload["metadata"] = metadata

        logger.info(f"Creating Vapi call to {customer_number}")
        async with self._client() as client:
            response = await client.post("/call", json=payload)

        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            message = (error_data.get("message") if isinstance(error_data, dict) else None) or "Unknown error"
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)
            logger.error(f"Vapi call creation failed: {response.status_code} {response.text[:500]}")
            raise VapiAPIError(
                f"Vapi API error: {response.status_code} - {message}",
                status_code=response.status_code,
            )

        try:
            call_data = response.json()
        except ValueError:
            call_data = None
        if not isinstance(call_data, dict):
            logger.error(f"Vapi call creation returned an unreadable body: {response.text[:500]}")
            raise VapiAPIError(
                f"Vapi API error: {response.status_code} - Unexpected response body",
                status_code=response.status_code,
            )
        logger.info(f"Vapi call created: id={call_data.get('id')} status={call_data.get('status')}")
        return call_data

    async def get_call(self, call_id: str) -> CallStatus:
        """Fetch the current status, transcript and summary of a call."""
        async with self._client() as client:
            response = await client.get(f"/call/{call_id}")

        if not response.is_success:
            raise VapiAPIError(
                f"Failed to get call status: {response.status_code}",
                status_code=response.status_code,
            )
        return CallStatus.from_api(response.json())

    async def wait_for_call(
        self,
        call_id: str,
        poll_interval: float = 5.0,
        timeout: float = 600.0,
    ) -> CallStatus:
        """Poll a call until Vapi reports it ended or ``timeout`` seconds pass.

        Returns the last status seen, ended or not.
        """
        deadline = time.monotonic() + timeout
        status = await self.get_call(call_id)
        while not status.has_ended and time.monotonic() < deadline:
            logger.debug(f"Call {call_id} is {status.status}, polling again in {poll_interval}s")
            await asyncio.sleep(poll_interval)
            status = await self.get_call(call_id)
        return status
