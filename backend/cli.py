"""Command-line entry points.

    make-reservation --restaurant "The French Laundry" --location "Yountville, CA" \
        --date "Friday" --time "7:00 PM" --party 2 --name "John Doe" --phone "+14155551234"
    make-reservation --status CALL_ID [--wait]

    introduction-agent introduce --to +15551234567 --name Sam
    introduction-agent introduce-status --id CALL_ID --transcript
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from integrations.introduction.plugin import introduction_agent_plugin
from integrations.plugins import PluginHost
from models.reservations import ReservationRequest
from tools.reservations import check_reservation_status, make_reservation
from tools.vapi_calls import get_vapi_client

DEFAULT_ENV_FILE = os.path.join("credentials", "api-keys.txt")

# Plugin config keys that can be set from the environment
INTRODUCTION_ENV = {
    "defaultToNumber": "INTRODUCTION_DEFAULT_TO_NUMBER",
    "ownerName": "INTRODUCTION_OWNER_NAME",
    "ownerPhone": "INTRODUCTION_OWNER_PHONE",
    "ownerEmail": "INTRODUCTION_OWNER_EMAIL",
    "voiceId": "INTRODUCTION_VOICE_ID",
}

REQUIRED_RESERVATION_OPTIONS = ["restaurant", "date", "time", "party", "name", "phone"]


def load_environment() -> None:
    """Load API keys from RESERVATIONS_ENV_FILE (default credentials/api-keys.txt) and .env."""
    load_dotenv(os.getenv("RESERVATIONS_ENV_FILE", DEFAULT_ENV_FILE))
    load_dotenv()


def build_reservation_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="make-reservation",
        description="Find a restaurant and have the AI voice assistant call it to book a table.",
    )
    parser.add_argument("--restaurant", help="Restaurant name (required)")
    parser.add_argument("--location", default="near me", help='Location/city (default: "near me")')
    parser.add_argument("--date", help='Reservation date (e.g., "tomorrow", "Friday", "Jan 30")')
    parser.add_argument("--time", help='Reservation time (e.g., "7:30 PM")')
    parser.add_argument("--party", type=int, help="Party size")
    parser.add_argument("--name", help="Your name for the reservation")
    parser.add_argument("--phone", help="Your phone number (E.164 recommended)")
    parser.add_argument("--email", help="Email to give if the restaurant asks")
    parser.add_argument(
        "--question", action="append", default=[], dest="questions",
        help="Extra question to ask once the table is confirmed (repeatable)",
    )
    parser.add_argument("--status", metavar="CALL_ID", help="Check status of a call by call ID")
    parser.add_argument("--wait", action="store_true", help="Poll the call until it ends")
    return parser


async def _run_status(call_id: str, wait: bool) -> int:
    client = get_vapi_client()
    if wait:
        print(f"\n⏳ Waiting for call {call_id} to end...")
        status = await client.wait_for_call(call_id)
    else:
        print(f"\n📊 Checking call status for {call_id}...")
        status = await check_reservation_status(client, call_id)

    print("\n📋 Call Details:")
    print(json.dumps({"success": True, **status.model_dump()}, indent=2))
    return 0


async def _run_reservation(args: argparse.Namespace) -> int:
    request = ReservationRequest(
        restaurant_name=args.restaurant,
        location=args.location,
        date=args.date,
        time=args.time,
        party_size=args.party,
        customer_name=args.name,
        customer_phone=args.phone,
        customer_email=args.email,
        custom_questions=args.questions,
    )
    client = get_vapi_client()
    result = await make_reservation(request, client)

    print("\n🎉 Success!")
    print("\n📋 Reservation Details:")
    print(json.dumps(result.model_dump(mode="json"), indent=2))

    if args.wait:
        return await _run_status(result.call.call_id, wait=True)

    print("\n💡 Tip: Check the call status in a few minutes with:")
    print(f"   make-reservation --status {result.call.call_id}")
    return 0


def reservation_main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    load_environment()

    parser = build_reservation_parser()
    args = parser.parse_args(argv)

    try:
        if args.status:
            return asyncio.run(_run_status(args.status, args.wait))

        missing = [opt for opt in REQUIRED_RESERVATION_OPTIONS if not getattr(args, opt)]
        if missing:
            print(
                f"❌ Missing required options: {', '.join('--' + opt for opt in missing)}",
                file=sys.stderr,
            )
            print("Run with --help for usage information.", file=sys.stderr)
            return 1

        return asyncio.run(_run_reservation(args))
    except Exception as e:
        logging.getLogger(__name__).debug("Reservation command failed", exc_info=True)
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1


def introduction_config_from_env() -> dict:
    config = {}
    for key, env_var in INTRODUCTION_ENV.items():
        value = os.getenv(env_var)
        if value:
            config[key] = value
    if os.getenv("INTRODUCTION_ENABLED", "").lower() in ("0", "false", "no"):
        config["enabled"] = False
    return config


def introduction_main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    load_environment()

    host = PluginHost(
        plugin_config=introduction_config_from_env(),
        logger=logging.getLogger("introduction-agent"),
    )
    introduction_agent_plugin.register(host)
    return host.run_cli(argv, prog="introduction-agent")


if __name__ == "__main__":
    sys.exit(reservation_main())
