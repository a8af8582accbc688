from integrations.vapi.prompts import (
    build_introduction_prompt,
    build_reservation_prompt,
    format_email_for_speech,
    format_phone_for_speech,
    generate_first_message,
    generate_personalized_first_message,
    spell_name,
)


def test_format_phone_for_speech_drops_us_country_code():
    assert format_phone_for_speech("+1 (832) 555-1234") == "8, 3, 2, 5, 5, 5, 1, 2, 3, 4"
    assert format_phone_for_speech("832-555-1234") == "8, 3, 2, 5, 5, 5, 1, 2, 3, 4"


def test_format_email_for_speech():
    assert format_email_for_speech("sam.lee@example.com") == "sam dot lee at example dot com"


def test_spell_name():
    assert spell_name("Onuoha") == "O-N-U-O-H-A"
    assert spell_name("O'Neil") == "O-N-E-I-L"


def test_first_messages():
    assert "Bella" in generate_first_message("Angel")
    assert "Angel's AI assistant" in generate_first_message("Angel")
    personalized = generate_personalized_first_message("Angel", "Jordan")
    assert personalized.startswith("Hey Jordan!")
    assert "Angel mentioned you" in personalized


def test_introduction_prompt_mentions_owner_and_guardrails():
    prompt = build_introduction_prompt("Angel")
    assert "You are Bella, Angel's personal AI assistant" in prompt
    assert "SECURITY" in prompt
    assert "CALLBACK" not in prompt


def test_introduction_prompt_callback_details_are_spoken():
    prompt = build_introduction_prompt("Angel", "+18325551234", "angel@example.com")
    assert "8, 3, 2, 5, 5, 5, 1, 2, 3, 4" in prompt
    assert "angel at example dot com" in prompt


def test_reservation_prompt_contains_booking_details():
    prompt = build_reservation_prompt(
        date_for_call="Friday, March 22nd",
        time="7:30 PM",
        party_size=4,
        customer_name="Sam Rivera",
        customer_phone="+14155550123",
    )
    assert "- Date: Friday, March 22nd" in prompt
    assert "- Time: 7:30 PM" in prompt
    assert "- Party size: 4" in prompt
    assert 'Say "Sam Rivera"' in prompt
    assert "R-I-V-E-R-A" in prompt
    assert "4, 1, 5, 5, 5, 5, 0, 1, 2, 3" in prompt
    assert "4... 1... 5..." in prompt
    assert "ADDITIONAL QUESTIONS" not in prompt
    assert "EMAIL" not in prompt


def test_reservation_prompt_optional_sections():
    prompt = build_reservation_prompt(
        date_for_call="tomorrow-ish",
        time="8 PM",
        party_size=2,
        customer_name="Cher",
        customer_phone="4155550123",
        customer_email="cher@example.com",
        custom_questions=["Is there parking?", "Do you have a patio?"],
    )
    assert "- Date: tomorrow-ish" in prompt
    assert "ADDITIONAL QUESTIONS TO ASK (after reservation is confirmed):\n- Is there parking?\n- Do you have a patio?" in prompt
    assert 'WHEN THEY ASK FOR EMAIL: Say "cher at example dot com"' in prompt
    assert "spell it" not in prompt
