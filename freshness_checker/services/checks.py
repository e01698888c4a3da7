"""
Freshness check: analyzes a photo, then enriches a positive food detection
with spoiled reference images and recent recalls.
"""

import asyncio
import logging

import httpx

from freshness_checker.schemas.analysis import CheckResult
from freshness_checker.services.freshness_ai import FreshnessAI
from freshness_checker.services.recalls import fetch_recalls
from freshness_checker.services.spoiled_images import SpoiledImageGenerator

logger = logging.getLogger(__name__)


async def run_check(
    ai: FreshnessAI,
    images: SpoiledImageGenerator,
    http_client: httpx.AsyncClient,
    image_base64: str,
    media_type: str,
) -> CheckResult:
    analysis = await ai.analyze_image(image_base64, media_type)
    logger.info(f"Analyzed image: {analysis.food_name} -> {analysis.is_spoiled}")

    if not analysis.food_detected:
        return CheckResult(analysis=analysis, food_detected=False)

    spoiled_images, recalls = await asyncio.gather(
        images.generate(analysis.food_name),
        fetch_recalls(http_client, analysis.food_name),
    )
    return CheckResult(
        analysis=analysis,
        food_detected=True,
        spoiled_images=spoiled_images,
        recalls=recalls,
    )
