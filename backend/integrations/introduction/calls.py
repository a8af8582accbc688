"""Places Bella's introduction calls through Vapi."""

import logging
from typing import Optional

import httpx

from integrations.introduction.config import (
    IntroductionAgentConfig,
    get_phone_number_id,
    get_vapi_api_key,
)
from integrations.vapi.assistant_config import build_introduction_assistant
from integrations.vapi.client import VapiAPIError, VapiClient
from integrations.vapi.prompts import (
    build_introduction_prompt,
    generate_first_message,
    generate_personalized_first_message,
)
from models.calls import CallStatus, InitiateCallResult

logger = logging.getLogger(__name__)


class IntroductionCaller:
    """Builds the introduction assistant from config and dials the recipient."""

    def __init__(self, config: IntroductionAgentConfig, client: Optional[VapiClient] = None):
        self.config = config
        self.client = client or VapiClient(
            api_key=get_vapi_api_key(config),
            phone_number_id=get_phone_number_id(config),
        )

    def first_message(
        self,
        recipient_name: Optional[str] = None,
        custom_first_message: Optional[str] = None,
    ) -> str:
        if custom_first_message:
            return custom_first_message
        if recipient_name:
            return generate_personalized_first_message(self.config.owner_name, recipient_name)
        return generate_first_message(self.config.owner_name)

    async def initiate_call(
        self,
        to_number: str,
        recipient_name: Optional[str] = None,
        custom_first_message: Optional[str] = None,
    ) -> InitiateCallResult:
        """Start an introduction call. Failures come back as ``success=False``."""
        system_prompt = build_introduction_prompt(
            self.config.owner_name,
            self.config.owner_phone,
            self.config.owner_email,
        )
        assistant = build_introduction_assistant(
            self.config,
            system_prompt,
            self.first_message(recipient_name, custom_first_message),
        )

        try:
            call_data = await self.client.create_call(
                assistant,
                customer_number=to_number,
                customer_name=recipient_name,
                metadata={"call_type": "introduction"},
            )
        except VapiAPIError as e:
            return InitiateCallResult(success=False, error=str(e))
        except httpx.HTTPError as e:
            logger.error(f"Introduction call to {to_number} failed: {e}")
            return InitiateCallResult(success=False, error=str(e) or type(e).__name__)

        return InitiateCallResult(
            success=True,
            call_id=call_data.get("id"),
            status=call_data.get("status"),
        )

    async def get_call_status(self, call_id: str) -> CallStatus:
        return await self.client.get_call(call_id)
