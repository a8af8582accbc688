"""In-process plugin host.

Plugins call back into the host during ``register(api)`` to expose gateway
methods (RPC-style handlers that answer through ``respond``), LangChain
tools for the agent, and argparse subcommands for the CLI.
"""

import argparse
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional

from langchain_core.tools import BaseTool

Respond = Callable[..., None]
GatewayHandler = Callable[[dict, Respond], Awaitable[None]]
CliRegistrar = Callable[[argparse._SubParsersAction], None]


class PluginHost:
    """Collects what plugins register and dispatches calls to it."""

    def __init__(self, plugin_config: Optional[dict] = None, logger: Optional[logging.Logger] = None):
        self.plugin_config = plugin_config or {}
        self.logger = logger or logging.getLogger("plugins")
        self.gateway_methods: dict[str, GatewayHandler] = {}
        self.tools: dict[str, BaseTool] = {}
        self.cli_commands: list[str] = []
        self._cli_registrars: list[CliRegistrar] = []

    def register_gateway_method(self, name: str, handler: GatewayHandler) -> None:
        if name in self.gateway_methods:
            raise ValueError(f"Gateway method already registered: {name}")
        self.gateway_methods[name] = handler

    def register_tool(self, tool: BaseTool) -> None:
        if tool.name in self.tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self.tools[tool.name] = tool

    def register_cli(self, registrar: CliRegistrar, commands: list[str]) -> None:
        self._cli_registrars.append(registrar)
        self.cli_commands.extend(commands)

    def get_tool(self, name: str) -> BaseTool:
        return self.tools[name]

    async def call_gateway(self, name: str, params: Optional[dict] = None) -> tuple[bool, Any]:
        """Invoke a gateway method and return what it responded with as ``(ok, payload)``."""
        handler = self.gateway_methods.get(name)
        if handler is None:
            return False, {"error": f"Unknown gateway method: {name}"}

        response: dict[str, Any] = {}

        def respond(ok: bool, payload: Any = None) -> None:
            response["ok"] = ok
            response["payload"] = payload

        await handler(params or {}, respond)

        if "ok" not in response:
            return False, {"error": f"{name} did not respond"}
        return response["ok"], response["payload"]

    def build_cli_parser(self, prog: Optional[str] = None) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=prog)
        subparsers = parser.add_subparsers(dest="command", required=True)
        for registrar in self._cli_registrars:
            registrar(subparsers)
        return parser

    def run_cli(self, argv: Optional[list[str]] = None, prog: Optional[str] = None) -> int:
        """Parse ``argv`` and run the selected command. Returns the exit code."""
        args = self.build_cli_parser(prog).parse_args(argv)
        result = args.handler(args)
        if inspect.isawaitable(result):
            result = asyncio.run(result)
        return result or 0
