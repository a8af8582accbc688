import asyncio
import json
import logging

import httpx
import pytest

from integrations.introduction.calls import IntroductionCaller
from integrations.introduction.plugin import IntroductionAgentPlugin
from integrations.plugins import PluginHost

CONFIG = {"vapiApiKey": "test-key", "vapiPhoneNumberId": "pn-123", "ownerName": "Angel"}

ENDED_CALL = {
    "id": "call-7",
    "status": "ended",
    "duration": 42,
    "endedReason": "customer-ended-call",
    "recordingUrl": "https://storage.vapi.ai/call-7.wav",
    "transcript": "AI: Hey!\nUser: Hi Bella.",
    "analysis": {"summary": "Bella said hi."},
}


def vapi_handler(request: httpx.Request) -> httpx.Response:
    if request.method == "POST":
        return httpx.Response(201, json={"id": "call-7", "status": "queued"})
    return httpx.Response(200, json=ENDED_CALL)


@pytest.fixture
def registered(make_vapi_client):
    """A host with the plugin registered and Vapi answered by ``vapi_handler``."""

    def factory(config=CONFIG, handler=vapi_handler):
        host = PluginHost(plugin_config=dict(config), logger=logging.getLogger("test-host"))
        plugin = IntroductionAgentPlugin()
        plugin.register(host)
        client, seen = make_vapi_client(handler)
        if plugin.config.enabled and plugin.validation.valid:
            plugin._caller = IntroductionCaller(plugin.config, client=client)
        return host, plugin, seen

    return factory


def test_register_exposes_methods_tools_and_commands(registered):
    host, plugin, _ = registered()
    assert set(host.gateway_methods) == {"introduction.call", "introduction.status"}
    assert set(host.tools) == {"introduction_call", "check_introduction_status"}
    assert host.cli_commands == ["introduce", "introduce-status"]
    assert host.get_tool("introduction_call").metadata == {"label": "Introduction Call"}
    assert plugin.id == "introduction-agent"


def test_register_logs_readiness(caplog):
    with caplog.at_level(logging.INFO, logger="test-host"):
        IntroductionAgentPlugin().register(PluginHost(CONFIG, logging.getLogger("test-host")))
        IntroductionAgentPlugin().register(PluginHost({}, logging.getLogger("test-host")))
        IntroductionAgentPlugin().register(PluginHost({"enabled": False}, logging.getLogger("test-host")))

    messages = [record.getMessage() for record in caplog.records]
    assert "[introduction-agent] Ready (owner: Angel)" in messages
    assert any(m.startswith("[introduction-agent] Configuration incomplete: Missing vapiApiKey") for m in messages)
    assert "[introduction-agent] Plugin disabled" in messages


def test_gateway_call_places_personalized_call(registered):
    host, _, seen = registered()

    ok, payload = asyncio.run(host.call_gateway("introduction.call", {
        "to": " +15551234567 ",
        "recipientName": "Jordan",
    }))

    assert ok is True
    assert payload == {
        "success": True,
        "callId": "call-7",
        "status": "queued",
        "message": "Introduction call initiated. Bella is calling now!",
    }
    body = seen[0][2]
    assert body["phoneNumberId"] == "pn-123"
    assert body["customer"] == {"number": "+15551234567", "name": "Jordan"}
    assert body["assistant"]["firstMessage"].startswith("Hey Jordan!")
    assert "You are Bella, Angel's personal AI assistant" in body["assistant"]["model"]["messages"][0]["content"]


def test_gateway_call_uses_default_number_and_custom_message(registered):
    host, _, seen = registered(config={**CONFIG, "defaultToNumber": "+15550001234"})

    ok, _ = asyncio.run(host.call_gateway("introduction.call", {"customMessage": "Yo, it's Bella."}))

    assert ok is True
    body = seen[0][2]
    assert body["customer"]["number"] == "+15550001234"
    assert body["assistant"]["firstMessage"] == "Yo, it's Bella."


def test_gateway_call_validation_errors(registered):
    host, _, seen = registered()

    ok, payload = asyncio.run(host.call_gateway("introduction.call", {}))
    assert ok is False
    assert payload == {"error": "Phone number is required (no default configured)"}

    ok, payload = asyncio.run(host.call_gateway("introduction.call", {"to": "555-1234"}))
    assert ok is False
    assert payload == {"error": "Phone number must be in E.164 format (e.g., +15551234567)"}
    assert seen == []


def test_gateway_call_when_disabled(registered):
    host, _, _ = registered(config={**CONFIG, "enabled": False})
    ok, payload = asyncio.run(host.call_gateway("introduction.call", {"to": "+15551234567"}))
    assert (ok, payload) == (False, {"error": "Introduction agent is disabled"})


def test_gateway_call_with_incomplete_config(registered):
    host, _, _ = registered(config={})
    ok, payload = asyncio.run(host.call_gateway("introduction.call", {"to": "+15551234567"}))
    assert ok is False
    assert "Missing vapiApiKey or VAPI_API_KEY env var" in payload["error"]


def test_gateway_call_reports_vapi_errors(registered):
    host, _, _ = registered(
        handler=lambda request: httpx.Response(400, json={"message": "Phone number is not active"})
    )
    ok, payload = asyncio.run(host.call_gateway("introduction.call", {"to": "+15551234567"}))
    assert ok is False
    assert payload == {"error": "Vapi API error: 400 - Phone number is not active"}


def test_gateway_call_reports_transport_errors(registered):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    host, _, _ = registered(handler=unreachable)
    ok, payload = asyncio.run(host.call_gateway("introduction.call", {"to": "+15551234567"}))
    assert ok is False
    assert payload == {"error": "connection refused"}


def test_caller_reports_non_json_success_body(make_vapi_client):
    client, _ = make_vapi_client(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    plugin = IntroductionAgentPlugin()
    plugin.register(PluginHost(plugin_config=dict(CONFIG), logger=logging.getLogger("test-host")))
    caller = IntroductionCaller(plugin.config, client=client)

    result = asyncio.run(caller.initiate_call("+15551234567"))

    assert result.success is False
    assert result.call_id is None
    assert "Unexpected response body" in result.error


def test_gateway_status(registered):
    host, _, _ = registered()

    ok, payload = asyncio.run(host.call_gateway("introduction.status", {"callId": "call-7"}))
    assert ok is True
    assert payload["status"] == "ended"
    assert payload["summary"] == "Bella said hi."

    ok, payload = asyncio.run(host.call_gateway("introduction.status", {"callId": "  "}))
    assert (ok, payload) == (False, {"error": "callId required"})


def test_unknown_gateway_method():
    ok, payload = asyncio.run(PluginHost().call_gateway("introduction.nope"))
    assert ok is False
    assert payload == {"error": "Unknown gateway method: introduction.nope"}


def test_introduction_call_tool(registered):
    host, _, _ = registered()

    result = asyncio.run(host.get_tool("introduction_call").ainvoke({
        "to": "+15551234567",
        "recipient_name": "Jordan",
    }))

    assert result["success"] is True
    assert result["call_id"] == "call-7"
    assert 'call_id "call-7"' in result["tip"]


def test_introduction_call_tool_returns_errors(registered):
    host, _, _ = registered()
    result = asyncio.run(host.get_tool("introduction_call").ainvoke({"to": "not-a-number"}))
    assert result == {"error": "Phone number must be in E.164 format (e.g., +15551234567)"}


def test_check_introduction_status_tool(registered):
    host, _, _ = registered()

    result = asyncio.run(host.get_tool("check_introduction_status").ainvoke({"call_id": "call-7"}))

    assert result == {
        "call_id": "call-7",
        "status": "ended",
        "duration": "42 seconds",
        "ended_reason": "customer-ended-call",
        "recording_url": "https://storage.vapi.ai/call-7.wav",
        "summary": "Bella said hi.",
        "transcript": "AI: Hey!\nUser: Hi Bella.",
    }


def test_cli_introduce(registered, capsys):
    host, _, seen = registered()

    code = host.run_cli(["introduce", "--to", "+15551234567", "-n", "Jordan"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Call ID: call-7" in out
    assert "introduce-status --id call-7" in out
    assert seen[0][2]["customer"]["name"] == "Jordan"


def test_cli_introduce_failure(registered, capsys):
    host, _, _ = registered()
    code = host.run_cli(["introduce", "--to", "12345"])
    assert code == 1
    assert "E.164" in capsys.readouterr().err


def test_cli_status_outputs(registered, capsys):
    host, _, _ = registered()

    assert host.run_cli(["introduce-status", "--id", "call-7", "--transcript"]) == 0
    out = capsys.readouterr().out
    assert "Duration: 42 seconds" in out
    assert "Ended: customer-ended-call" in out
    assert "User: Hi Bella." in out

    assert host.run_cli(["introduce-status", "-i", "call-7", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["id"] == "call-7"
    assert data["recording_url"] == "https://storage.vapi.ai/call-7.wav"

    assert host.run_cli(["introduce-status"]) == 1
    assert "Call ID required" in capsys.readouterr().err


def test_host_rejects_duplicate_registration():
    host = PluginHost(CONFIG)
    IntroductionAgentPlugin().register(host)
    with pytest.raises(ValueError, match="already registered"):
        IntroductionAgentPlugin().register(host)
