"""Configuration for the introduction-call plugin.

Values come from the host's plugin config (camelCase or snake_case keys);
the Vapi key and phone number id fall back to the environment.
"""

import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from integrations.vapi.assistant_config import DEFAULT_VOICE_ID


class IntroductionAgentConfig(BaseModel):
    """Settings for Bella's introduction calls."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enabled: bool = True

    # Vapi credentials and outbound number
    vapi_api_key: Optional[str] = None
    vapi_phone_number_id: Optional[str] = None

    # Number to call when none is given
    default_to_number: Optional[str] = None

    # Bella introduces herself as "<owner_name>'s" assistant
    owner_name: str = "Angel"
    owner_phone: str = ""
    owner_email: str = ""

    # ElevenLabs voice; lower stability sounds more dynamic
    voice_id: str = DEFAULT_VOICE_ID
    voice_stability: float = Field(default=0.35, ge=0, le=1)
    voice_similarity_boost: float = Field(default=0.8, ge=0, le=1)
    use_speaker_boost: bool = True

    max_duration_seconds: int = 300
    response_delay_seconds: float = 1.0
    silence_timeout_seconds: int = 30


class ConfigValidation(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


UI_HINTS: dict[str, dict[str, Any]] = {
    "enabled": {"label": "Enabled"},
    "vapiApiKey": {
        "label": "VAPI API Key",
        "sensitive": True,
        "help": "API key from dashboard.vapi.ai",
    },
    "vapiPhoneNumberId": {
        "label": "VAPI Phone Number ID",
        "help": "Your outbound phone number ID in VAPI",
    },
    "defaultToNumber": {"label": "Default To Number", "placeholder": "+15550001234"},
    "ownerName": {"label": "Your Name", "help": "Bella introduces itself as 'your' AI assistant"},
    "ownerPhone": {"label": "Your Phone", "help": "Your callback phone number"},
    "ownerEmail": {"label": "Your Email"},
    "voiceId": {"label": "ElevenLabs Voice ID", "advanced": True},
    "voiceStability": {"label": "Voice Stability", "advanced": True},
    "voiceSimilarityBoost": {"label": "Voice Similarity Boost", "advanced": True},
    "maxDurationSeconds": {"label": "Max Call Duration (seconds)", "advanced": True},
    "responseDelaySeconds": {"label": "Response Delay (seconds)", "advanced": True},
    "silenceTimeoutSeconds": {"label": "Silence Timeout (seconds)", "advanced": True},
}


def resolve_config(raw: Any) -> IntroductionAgentConfig:
    """Build the config from raw plugin settings, applying defaults.

    Anything that is not a mapping is treated as an empty config. Invalid
    values raise pydantic.ValidationError.
    """
    data = raw if isinstance(raw, dict) else {}
    return IntroductionAgentConfig.model_validate(data)


def get_vapi_api_key(config: IntroductionAgentConfig) -> str:
    key = config.vapi_api_key or os.getenv("VAPI_API_KEY")
    if not key:
        raise ValueError("VAPI API key not configured")
    return key


def get_phone_number_id(config: IntroductionAgentConfig) -> Optional[str]:
    return config.vapi_phone_number_id or os.getenv("VAPI_PHONE_NUMBER_ID")


def validate_config(config: IntroductionAgentConfig) -> ConfigValidation:
    """Check that everything needed to place a call is present."""
    errors = []
    if not (config.vapi_api_key or os.getenv("VAPI_API_KEY")):
        errors.append("Missing vapiApiKey or VAPI_API_KEY env var")
    if not get_phone_number_id(config):
        errors.append("Missing vapiPhoneNumberId or VAPI_PHONE_NUMBER_ID env var")
    return ConfigValidation(valid=not errors, errors=errors)
