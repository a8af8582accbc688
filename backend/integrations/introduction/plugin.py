"""Introduction Agent plugin.

Makes outbound phone calls through Vapi with an ElevenLabs voice so Bella
can introduce itself as the owner's AI assistant. Bella is told never to
share the owner's personal information.
"""

import argparse
import json
import re
import sys
from typing import Any, Optional

from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

from integrations.introduction.calls import IntroductionCaller
from integrations.introduction.config import (
    UI_HINTS,
    IntroductionAgentConfig,
    resolve_config,
    validate_config,
)
from models.calls import CallStatus, InitiateCallResult

LOG_PREFIX = "[introduction-agent]"

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


class IntroductionCallInput(BaseModel):
    to: Optional[str] = Field(
        default=None, description="Phone number to call (E.164 format, e.g., +15551234567)"
    )
    recipient_name: Optional[str] = Field(
        default=None, description="Name of the person being called (for personalization)"
    )
    custom_message: Optional[str] = Field(default=None, description="Custom first message override")


class CheckCallStatusInput(BaseModel):
    call_id: str = Field(description="The call ID to check status for")


def _clean(value: Any) -> Optional[str]:
    """Trim string params; anything else (or blank) counts as not given."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _error_message(err: Exception) -> str:
    return str(err) or type(err).__name__


class IntroductionAgentPlugin:
    id = "introduction-agent"
    name = "Introduction Agent"
    description = "Make introduction phone calls using VAPI AI with ElevenLabs voice"
    config_schema = {"parse": resolve_config, "ui_hints": UI_HINTS}

    def __init__(self):
        self.config: Optional[IntroductionAgentConfig] = None
        self.validation = None
        self.logger = None
        self._caller: Optional[IntroductionCaller] = None

    # ==================== Calls ====================

    def get_caller(self) -> IntroductionCaller:
        """Create the Vapi-backed caller on first use."""
        if not self.config.enabled:
            raise RuntimeError("Introduction agent is disabled")
        if not self.validation.valid:
            raise RuntimeError("; ".join(self.validation.errors))
        if self._caller is None:
            self._caller = IntroductionCaller(self.config)
        return self._caller

    async def initiate_introduction_call(
        self,
        to: Optional[str] = None,
        recipient_name: Optional[str] = None,
        custom_message: Optional[str] = None,
    ) -> InitiateCallResult:
        to_number = to or self.config.default_to_number
        if not to_number:
            raise ValueError("Phone number is required (no default configured)")
        if not E164_PATTERN.match(to_number):
            raise ValueError("Phone number must be in E.164 format (e.g., +15551234567)")

        caller = self.get_caller()

        recipient = f" ({recipient_name})" if recipient_name else ""
        self.logger.info(f"{LOG_PREFIX} Initiating call to {to_number}{recipient}")

        return await caller.initiate_call(
            to_number,
            recipient_name=recipient_name,
            custom_first_message=custom_message,
        )

    async def check_call_status(self, call_id: str) -> CallStatus:
        return await self.get_caller().get_call_status(call_id)

    # ==================== Gateway methods ====================

    async def _gateway_call(self, params: dict, respond) -> None:
        try:
            if not self.config.enabled:
                respond(False, {"error": "Introduction agent is disabled"})
                return

            result = await self.initiate_introduction_call(
                to=_clean(params.get("to")),
                recipient_name=_clean(params.get("recipientName")),
                custom_message=_clean(params.get("customMessage")),
            )
            if result.success:
                respond(True, {
                    "success": True,
                    "callId": result.call_id,
                    "status": result.status,
                    "message": "Introduction call initiated. Bella is calling now!",
                })
            else:
                respond(False, {"error": result.error})
        except Exception as e:
            self.logger.error(f"{LOG_PREFIX} Call failed: {_error_message(e)}")
            respond(False, {"error": _error_message(e)})

    async def _gateway_status(self, params: dict, respond) -> None:
        try:
            call_id = _clean(params.get("callId"))
            if not call_id:
                respond(False, {"error": "callId required"})
                return
            status = await self.check_call_status(call_id)
            respond(True, status.model_dump())
        except Exception as e:
            respond(False, {"error": _error_message(e)})

    # ==================== Agent tools ====================

    def build_tools(self) -> list[BaseTool]:
        plugin = self

        @tool("introduction_call", args_schema=IntroductionCallInput)
        async def introduction_call(
            to: Optional[str] = None,
            recipient_name: Optional[str] = None,
            custom_message: Optional[str] = None,
        ) -> dict:
            """Make an introduction phone call where Bella introduces itself as your AI assistant.
            The call is made using VAPI with an ElevenLabs voice. Bella will explain what it can
            help with and answer questions. The agent has security guardrails to prevent sharing
            personal information."""
            try:
                result = await plugin.initiate_introduction_call(
                    to=_clean(to),
                    recipient_name=_clean(recipient_name),
                    custom_message=_clean(custom_message),
                )
            except Exception as e:
                return {"error": _error_message(e)}

            if not result.success:
                return {"success": False, "error": result.error}
            return {
                "success": True,
                "call_id": result.call_id,
                "status": result.status,
                "message": "Introduction call initiated! Bella is calling now to introduce itself.",
                "tip": f'Check the call status later with: check_introduction_status with call_id "{result.call_id}"',
            }

        @tool("check_introduction_status", args_schema=CheckCallStatusInput)
        async def check_introduction_status(call_id: str) -> dict:
            """Check the status of a previous introduction call, including transcript, recording, and outcome."""
            call_id = _clean(call_id)
            if not call_id:
                return {"error": "call_id required"}
            try:
                status = await plugin.check_call_status(call_id)
            except Exception as e:
                return {"error": _error_message(e)}
            return {
                "call_id": status.id,
                "status": status.status,
                "duration": f"{status.duration:g} seconds" if status.duration else None,
                "ended_reason": status.ended_reason,
                "recording_url": status.recording_url,
                "summary": status.summary,
                "transcript": status.transcript,
            }

        introduction_call.metadata = {"label": "Introduction Call"}
        check_introduction_status.metadata = {"label": "Check Introduction Call Status"}
        return [introduction_call, check_introduction_status]

    # ==================== CLI ====================

    def register_commands(self, subparsers: argparse._SubParsersAction) -> None:
        introduce = subparsers.add_parser(
            "introduce", help="Make an introduction phone call where Bella introduces itself"
        )
        introduce.add_argument("-t", "--to", help="Phone number to call (E.164 format)")
        introduce.add_argument("-n", "--name", help="Name of the person being called")
        introduce.add_argument("-m", "--message", help="Custom first message")
        introduce.set_defaults(handler=self._cli_introduce)

        status = subparsers.add_parser("introduce-status", help="Check the status of an introduction call")
        status.add_argument("-i", "--id", dest="call_id", help="Call ID to check")
        status.add_argument("-j", "--json", action="store_true", help="Output raw JSON")
        status.add_argument("-t", "--transcript", action="store_true", help="Show full transcript")
        status.set_defaults(handler=self._cli_status)

    async def _cli_introduce(self, args: argparse.Namespace) -> int:
        print("\n📞 Initiating introduction call...\n")
        try:
            result = await self.initiate_introduction_call(
                to=_clean(args.to),
                recipient_name=_clean(args.name),
                custom_message=_clean(args.message),
            )
        except Exception as e:
            print(f"\n❌ Error: {_error_message(e)}", file=sys.stderr)
            return 1

        if not result.success:
            print(f"❌ Call failed: {result.error}", file=sys.stderr)
            return 1

        print("✅ Introduction call initiated!")
        print(f"   Call ID: {result.call_id}")
        print(f"   Status: {result.status}")
        print("\n   Bella is now calling to introduce itself.")
        print(f"\n💡 Check status with: introduction-agent introduce-status --id {result.call_id}")
        return 0

    async def _cli_status(self, args: argparse.Namespace) -> int:
        call_id = _clean(args.call_id)
        if not call_id:
            print("❌ Call ID required. Use --id <callId>", file=sys.stderr)
            return 1

        try:
            status = await self.check_call_status(call_id)
        except Exception as e:
            print(f"\n❌ Error: {_error_message(e)}", file=sys.stderr)
            return 1

        if args.json:
            print(json.dumps(status.model_dump(), indent=2))
            return 0

        print("\n📊 Call Status\n")
        print(f"   Call ID: {status.id}")
        print(f"   Status: {status.status}")
        if status.duration:
            print(f"   Duration: {status.duration:g} seconds")
        if status.ended_reason:
            print(f"   Ended: {status.ended_reason}")
        if status.recording_url:
            print(f"\n🎙️  Recording: {status.recording_url}")
        if status.summary:
            print(f"\n📝 Summary:\n   {status.summary}")
        if args.transcript and status.transcript:
            print(f"\n📜 Transcript:\n{status.transcript}")
        return 0

    # ==================== Registration ====================

    def register(self, api) -> None:
        """Wire the plugin into a host (see integrations.plugins.PluginHost)."""
        self.config = self.config_schema["parse"](api.plugin_config)
        self.validation = validate_config(self.config)
        self.logger = api.logger
        self._caller = None

        api.register_gateway_method("introduction.call", self._gateway_call)
        api.register_gateway_method("introduction.status", self._gateway_status)
        for agent_tool in self.build_tools():
            api.register_tool(agent_tool)
        api.register_cli(self.register_commands, commands=["introduce", "introduce-status"])

        if not self.config.enabled:
            self.logger.info(f"{LOG_PREFIX} Plugin disabled")
        elif not self.validation.valid:
            self.logger.warning(
                f"{LOG_PREFIX} Configuration incomplete: {'; '.join(self.validation.errors)}"
            )
        else:
            self.logger.info(f"{LOG_PREFIX} Ready (owner: {self.config.owner_name})")


introduction_agent_plugin = IntroductionAgentPlugin()
