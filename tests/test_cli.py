import json

import httpx

import cli


def test_reservation_main_reports_missing_options(capsys):
    code = cli.reservation_main(["--restaurant", "Nobu", "--time", "7 PM"])

    err = capsys.readouterr().err
    assert code == 1
    assert "Missing required options: --date, --party, --name, --phone" in err


def test_reservation_main_status(monkeypatch, make_vapi_client, capsys):
    client, seen = make_vapi_client(lambda request: httpx.Response(200, json={
        "id": "call-42", "status": "ended", "duration": 61, "endedReason": "assistant-ended-call",
    }))
    monkeypatch.setattr(cli, "get_vapi_client", lambda: client)

    code = cli.reservation_main(["--status", "call-42"])

    out = capsys.readouterr().out
    assert code == 0
    assert seen[0][:2] == ("GET", "/call/call-42")
    details = json.loads(out.split("Call Details:", 1)[1])
    assert details["success"] is True
    assert details["ended_reason"] == "assistant-ended-call"


def test_reservation_main_reports_errors(capsys):
    code = cli.reservation_main(["--status", "call-42"])
    assert code == 1
    assert "VAPI_API_KEY not set" in capsys.readouterr().err


def test_introduction_config_from_env(monkeypatch):
    monkeypatch.setenv("INTRODUCTION_OWNER_NAME", "Jordan")
    monkeypatch.setenv("INTRODUCTION_DEFAULT_TO_NUMBER", "+15550001234")
    monkeypatch.setenv("INTRODUCTION_ENABLED", "false")

    config = cli.introduction_config_from_env()

    assert config["ownerName"] == "Jordan"
    assert config["defaultToNumber"] == "+15550001234"
    assert config["enabled"] is False


def test_introduction_main_registers_shared_plugin(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("RESERVATIONS_ENV_FILE", str(tmp_path / "missing.txt"))
    monkeypatch.setenv("INTRODUCTION_ENABLED", "false")
    monkeypatch.setenv("INTRODUCTION_OWNER_NAME", "Jordan")

    code = cli.introduction_main(["introduce", "--to", "+15551234567"])

    assert code == 1
    assert "Introduction agent is disabled" in capsys.readouterr().err
    assert cli.introduction_agent_plugin.config.enabled is False
    assert cli.introduction_agent_plugin.config.owner_name == "Jordan"
