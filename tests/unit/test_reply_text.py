import pytest

from leadbot.planner.reply_text import DEFAULT_REPLY, extract_reply_text


def test_mapping_prefers_reply_field():
    result = {"reply": "Hi there", "choices": [{"message": {"content": "ignored"}}]}

    assert extract_reply_text(result) == "Hi there"


def test_mapping_uses_completion_content():
    result = {"choices": [{"message": {"content": "  What's the brand name?  "}}]}

    assert extract_reply_text(result) == "What's the brand name?"


def test_mapping_without_text_uses_default():
    assert extract_reply_text({"choices": []}) == DEFAULT_REPLY
    assert extract_reply_text({"choices": []}, default=None) is None


def test_completion_content_wrapped_in_json_is_unwrapped():
    result = {"choices": [{"message": {"content": '{"reply": "Sure, which service?"}'}}]}

    assert extract_reply_text(result) == "Sure, which service?"


def test_plain_string_is_used_verbatim():
    assert extract_reply_text("Great, what's your budget?") == "Great, what's your budget?"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('{"reply": "A"}', "A"),
        ('{"message": "B", "text": "C"}', "B"),
        ('{"text": "C"}', "C"),
        ('[{"message": "D"}]', "D"),
    ],
)
def test_json_looking_strings_are_parsed(raw, expected):
    assert extract_reply_text(raw) == expected


def test_unparseable_json_looking_string_is_kept_raw():
    assert extract_reply_text("{not json}") == "{not json}"


def test_json_without_known_fields_uses_default():
    assert extract_reply_text('{"answer": "x"}') == DEFAULT_REPLY


def test_blank_and_none():
    assert extract_reply_text("   ") == DEFAULT_REPLY
    assert extract_reply_text(None, default=None) is None


@pytest.mark.parametrize("raw", ["[]", '["ok"]', "[1, 2]"])
def test_json_array_without_object_uses_default(raw):
    assert extract_reply_text(raw) == DEFAULT_REPLY
    assert extract_reply_text(raw, default=None) is None
