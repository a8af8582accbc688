import json

import httpx
import pytest

from integrations.vapi.client import VapiClient


@pytest.fixture
def make_vapi_client():
    """Factory for a VapiClient whose requests are answered by ``handler``.

    Every request is appended to the returned list as (method, path, json body).
    """

    def factory(handler):
        seen = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content) if request.content else None
            seen.append((request.method, request.url.path, body, request.headers))
            return handler(request)

        client = VapiClient(
            api_key="test-key",
            phone_number_id="pn-123",
            transport=httpx.MockTransport(recording_handler),
        )
        return client, seen

    return factory


@pytest.fixture(autouse=True)
def clear_credentials(monkeypatch):
    for var in (
        "VAPI_API_KEY",
        "VAPI_PHONE_NUMBER_ID",
        "GOOGLE_PLACES_API_KEY",
        "GOOGLE_MAPS_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)
