import asyncio
from datetime import date
from types import SimpleNamespace

import pytest

from freshness_checker.services.errors import AINotConfiguredError, AIResponseError
from freshness_checker.services.freshness_ai import FreshnessAI, _extract_json


class FakeMessages:
    def __init__(self, text):
        self.text = text
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(content=[SimpleNamespace(text=self.text)])


def make_ai(reply: str) -> tuple[FreshnessAI, FakeMessages]:
    ai = FreshnessAI()
    messages = FakeMessages(reply)
    ai._client = SimpleNamespace(messages=messages)
    return ai, messages


def test_extract_json_strips_markdown_fences():
    assert _extract_json('```json\n{"a": 1}\n```') == {"a": 1}
    assert _extract_json('  {"a": 2}  ') == {"a": 2}


def test_analyze_image_sends_image_and_parses_result():
    ai, messages = make_ai(
        '{"food_name": "Banana", "is_spoiled": "Unsure", '
        '"explanation": "Brown spots on the peel.", "sensory_checks": "Squeeze gently."}'
    )
    result = asyncio.run(ai.analyze_image("aGVsbG8=", "image/png"))

    assert result.food_name == "Banana"
    assert result.is_spoiled == "Unsure"
    assert result.sensory_checks == "Squeeze gently."
    assert result.food_detected

    content = messages.requests[0]["messages"][0]["content"]
    assert content[0]["source"] == {"type": "base64", "media_type": "image/png", "data": "aGVsbG8="}
    assert "No food detected" in content[1]["text"]


def test_analyze_image_no_food():
    ai, _ = make_ai(
        '{"food_name": "No food detected", "is_spoiled": "N/A", '
        '"explanation": "The photo shows a coffee mug.", "sensory_checks": ""}'
    )
    result = asyncio.run(ai.analyze_image("aGVsbG8="))
    assert result.is_spoiled == "N/A"
    assert not result.food_detected


def test_analyze_image_unparseable_reply():
    ai, _ = make_ai("I think it looks fine!")
    with pytest.raises(AIResponseError, match="Could not understand the AI's response."):
        asyncio.run(ai.analyze_image("aGVsbG8="))


def test_analyze_image_rejects_unknown_status():
    ai, _ = make_ai('{"food_name": "Bread", "is_spoiled": "Stale", "explanation": "", "sensory_checks": ""}')
    with pytest.raises(AIResponseError):
        asyncio.run(ai.analyze_image("aGVsbG8="))


def test_estimate_spoilage():
    ai, messages = make_ai('{"start_date": "2025-06-22", "end_date": "2025-06-25"}')
    estimate = asyncio.run(ai.estimate_spoilage("Milk", date(2025, 6, 15)))

    assert estimate.start_date == date(2025, 6, 22)
    assert estimate.end_date == date(2025, 6, 25)
    assert "bought Milk on 2025-06-15" in messages.requests[0]["messages"][0]["content"]


def test_estimate_spoilage_inverted_range():
    ai, _ = make_ai('{"start_date": "2025-06-25", "end_date": "2025-06-22"}')
    with pytest.raises(AIResponseError, match="Could not get spoilage date estimate."):
        asyncio.run(ai.estimate_spoilage("Milk", date(2025, 6, 15)))


def test_estimate_spoilage_bad_json():
    ai, _ = make_ai('{"start_date": "next week"}')
    with pytest.raises(AIResponseError, match="Could not get spoilage date estimate."):
        asyncio.run(ai.estimate_spoilage("Milk", date(2025, 6, 15)))


def test_storage_advice():
    ai, _ = make_ai(
        '```json\n{"is_optimal": true, "optimal_method": "Refrigerator crisper drawer", '
        '"shelf_life_extension": "About a week"}\n```'
    )
    advice = asyncio.run(ai.storage_advice("Carrots", "crisper drawer"))
    assert advice.is_optimal is True
    assert advice.optimal_method == "Refrigerator crisper drawer"


def test_missing_api_key():
    ai = FreshnessAI()
    ai.api_key = ""
    with pytest.raises(AINotConfiguredError):
        asyncio.run(ai.analyze_image("aGVsbG8="))


def test_storage_advice_unparseable_reply():
    ai, _ = make_ai('{"is_optimal": "maybe"}')
    with pytest.raises(AIResponseError, match="Could not get storage advice."):
        asyncio.run(ai.storage_advice("Carrots", "counter"))


def test_blank_food_name_is_not_a_detection():
    ai, _ = make_ai('{"food_name": "  ", "is_spoiled": "Unsure", "explanation": "Too blurry.", "sensory_checks": ""}')
    result = asyncio.run(ai.analyze_image("aGVsbG8="))
    assert result.is_spoiled == "Unsure"
    assert not result.food_detected


def test_client_is_async():
    import anthropic

    ai = FreshnessAI()
    ai.api_key = "sk-ant-test"
    assert isinstance(ai.client, anthropic.AsyncAnthropic)
