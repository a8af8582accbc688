"""Transient Vapi assistant configs for outbound calls.

Each builder deep-copies a base config and fills in the call-specific
prompt, voice and timing settings. The result is sent inline with the
POST /call request, so nothing is registered on the Vapi side.
"""

import copy

DEFAULT_VOICE_ID = "21m00Tcm4TlvDq8ikWAM"

_BASE_ASSISTANT_CONFIG = {
    "model": {
        "provider": "openai",
        "model": "gpt-4.1",
        "temperature": 0.8,
        "messages": [
            {
                "role": "system",
                "content": "",
            }
        ],
    },
    "voice": {
        "provider": "11labs",
        "voiceId": DEFAULT_VOICE_ID,
        "stability": 0.35,
        "similarityBoost": 0.8,
        "useSpeakerBoost": True,
    },
    # Let the person who picks up speak first
    "firstMessageMode": "assistant-waits-for-user",
    "recordingEnabled": True,
    "dialKeypadFunctionEnabled": True,
    "maxDurationSeconds": 300,
    "silenceTimeoutSeconds": 30,
    "responseDelaySeconds": 1.0,
}

INTRODUCTION_END_CALL_PHRASES = [
    "have a great day",
    "goodbye",
    "take care",
    "thanks for your time",
    "bye",
    "talk to you later",
    "nice talking to you",
]

RESERVATION_END_CALL_PHRASES = [
    "reservation is confirmed",
    "all set",
    "you are all set",
    "we have you down",
    "see you then",
    "got you down",
    "sounds good",
    "have a good one",
]


def _base_config(system_prompt: str) -> dict:
    config = copy.deepcopy(_BASE_ASSISTANT_CONFIG)
    config["model"]["messages"][0]["content"] = system_prompt
    return config


def build_introduction_assistant(config, system_prompt: str, first_message: str) -> dict:
    """Assistant for an introduction call.

    Args:
        config: IntroductionAgentConfig supplying voice and timing settings
        system_prompt: Bella's introduction prompt
        first_message: What Bella says once the recipient answers
    """
    assistant = _base_config(system_prompt)
    assistant["voice"].update({
        "voiceId": config.voice_id,
        "stability": config.voice_stability,
        "similarityBoost": config.voice_similarity_boost,
        "useSpeakerBoost": config.use_speaker_boost,
    })
    assistant.update({
        "firstMessage": first_message,
        "endCallMessage": "Alright, well it was nice chatting! Take care!",
        "endCallPhrases": list(INTRODUCTION_END_CALL_PHRASES),
        "maxDurationSeconds": config.max_duration_seconds,
        "silenceTimeoutSeconds": config.silence_timeout_seconds,
        "responseDelaySeconds": config.response_delay_seconds,
    })
    return assistant


def build_reservation_assistant(system_prompt: str, voice_id: str = DEFAULT_VOICE_ID) -> dict:
    """Assistant that books a table. The restaurant greets first, so there is no first message."""
    assistant = _base_config(system_prompt)
    assistant["voice"]["voiceId"] = voice_id
    assistant.update({
        "endCallMessage": "Thanks so much!",
        "endCallPhrases": list(RESERVATION_END_CALL_PHRASES),
        "responseDelaySeconds": 1.2,
    })
    return assistant
