"""
FreshnessAI: Claude API integration service.

Image freshness analysis, spoilage date estimates and storage advice are all
routed through this class.
"""

import json
import logging
import re
from datetime import date
from functools import lru_cache

from pydantic import ValidationError

from freshness_checker.config import get_settings
from freshness_checker.schemas.analysis import (
    NO_FOOD_DETECTED,
    AnalysisResult,
    SpoilageEstimate,
    StorageAdvice,
)
from freshness_checker.services.errors import AINotConfiguredError, AIResponseError

logger = logging.getLogger(__name__)

ANALYSIS_JSON_SCHEMA = f"""\
Return valid JSON matching this exact structure:
{{
  "food_name": "The name of the food item in the image, or '{NO_FOOD_DETECTED}' if none is found.",
  "is_spoiled": "Fresh|Spoiled|Unsure|N/A",
  "explanation": "A detailed explanation of the freshness assessment, or why no food was detected.",
  "sensory_checks": "If unsure, detailed advice on checking for spoilage using smell, texture, and visual cues (not from the image). Empty string otherwise."
}}
Return ONLY the JSON, no markdown fences or extra text."""

SPOILAGE_JSON_SCHEMA = """\
Return valid JSON matching this exact structure:
{"start_date": "YYYY-MM-DD", "end_date": "YYYY-MM-DD"}
start_date is the start of the estimated spoilage range and end_date its end.
Return ONLY the JSON."""

STORAGE_JSON_SCHEMA = """\
Return valid JSON matching this exact structure:
{"is_optimal": true|false, "optimal_method": "string", "shelf_life_extension": "string"}
Return ONLY the JSON."""


def _extract_json(text: str) -> dict:
    """Extract JSON from Claude response, handling markdown fences."""
    text = text.strip()
    m = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if m:
        text = m.group(1).strip()
    return json.loads(text)


class FreshnessAI:
    """Freshness features powered by the Anthropic Claude API."""

    def __init__(self):
        settings = get_settings()
        self.model = settings.CLAUDE_MODEL
        self.api_key = settings.ANTHROPIC_API_KEY
        self._client = None

    @property
    def client(self):
        if self._client is None and self.api_key:
            import anthropic
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def _call_claude(
        self, system: str, user_message: str, max_tokens: int = 1024
    ) -> str:
        """Make a call to the Claude API. Returns the text response."""
        if not self.client:
            raise AINotConfiguredError("Anthropic API key not configured")
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user_message}],
        )
        return response.content[0].text

    async def _call_claude_with_image(
        self, system: str, text: str, image_base64: str, media_type: str = "image/jpeg", max_tokens: int = 2048
    ) -> str:
        """Call Claude with an image (vision)."""
        if not self.client:
            raise AINotConfiguredError("Anthropic API key not configured")
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": image_base64}},
                    {"type": "text", "text": text},
                ],
            }],
        )
        return response.content[0].text

    async def analyze_image(self, image_base64: str, media_type: str = "image/jpeg") -> AnalysisResult:
        """Judge whether the food in a photo is fresh, spoiled, or unclear."""
        system = (
            "You are a food safety expert who assesses food freshness from photos. "
            + ANALYSIS_JSON_SCHEMA
        )
        prompt = (
            "Analyze this image. Identify if there is a food item present.\n"
            "- If food is present: Identify the food item. Determine if it is fresh or spoiled. "
            "If you are unsure, state that. Provide a detailed explanation for your assessment. "
            "If you are unsure, also provide detailed advice on how to check for spoilage using "
            "smell, texture, and visual cues.\n"
            f"- If no food is present: Set 'food_name' to '{NO_FOOD_DETECTED}', 'is_spoiled' to 'N/A', "
            "and provide an explanation for what you see in the image instead.\n"
            "Respond in the requested JSON format."
        )
        text = await self._call_claude_with_image(system, prompt, image_base64, media_type)
        try:
            return AnalysisResult.model_validate(_extract_json(text))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse analysis response from Claude: {text!r} ({e})")
            raise AIResponseError("Could not understand the AI's response.") from e

    async def estimate_spoilage(self, food_name: str, purchase_date: date) -> SpoilageEstimate:
        """Estimate a typical spoilage date range for food bought on purchase_date."""
        system = "You are a food storage expert. " + SPOILAGE_JSON_SCHEMA
        user_msg = (
            f"Given that I bought {food_name} on {purchase_date.isoformat()}, provide a typical "
            "spoilage date range, assuming proper storage. Respond in the requested JSON format "
            'with "start_date" and "end_date" properties.'
        )
        text = await self._call_claude(system, user_msg, max_tokens=256)
        try:
            estimate = SpoilageEstimate.model_validate(_extract_json(text))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse spoilage date response: {text!r} ({e})")
            raise AIResponseError("Could not get spoilage date estimate.") from e
        if estimate.end_date < estimate.start_date:
            logger.error(f"Spoilage range ends before it starts: {text!r}")
            raise AIResponseError("Could not get spoilage date estimate.")
        return estimate

    async def storage_advice(self, food_name: str, storage_method: str) -> StorageAdvice:
        """Check whether the way a food is stored is optimal."""
        system = (
            "You are a food storage expert. Assess whether the described storage is optimal, "
            "name the best method, and describe how much longer it keeps when stored that way. "
            + STORAGE_JSON_SCHEMA
        )
        user_msg = f"Food: {food_name}\nCurrently stored: {storage_method}"
        text = await self._call_claude(system, user_msg, max_tokens=512)
        try:
            return StorageAdvice.model_validate(_extract_json(text))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse storage advice response: {text!r} ({e})")
            raise AIResponseError("Could not get storage advice.") from e


@lru_cache
def get_freshness_ai() -> FreshnessAI:
    return FreshnessAI()
