"""
openFDA recall lookup: cross-references a food name against the public
food enforcement (recall) reports of the last year.

Lookup failures never surface to the user; they are logged and treated as
"no recalls found".
"""

import logging
from datetime import date, timedelta

import httpx
from pydantic import ValidationError

from freshness_checker.config import get_settings
from freshness_checker.schemas.recall import FdaRecall

logger = logging.getLogger(__name__)


def build_recall_url(food_name: str, today: date | None = None) -> str:
    """Build the openFDA query URL for recalls of food_name reported in the lookback window."""
    settings = get_settings()
    today = today or date.today()
    from_date = (today - timedelta(days=settings.FDA_LOOKBACK_DAYS)).strftime("%Y%m%d")
    to_date = today.strftime("%Y%m%d")

    # First word only, for a broader search
    search_term = food_name.split()[0]

    # openFDA expects literal '+' separators, so the query is not passed as params
    return (
        f"{settings.FDA_API_URL}"
        f"?search=report_date:[{from_date}+TO+{to_date}]"
        f'+AND+product_description:"{search_term}"'
        f"&sort=recall_initiation_date:desc"
        f"&limit={settings.FDA_RESULT_LIMIT}"
    )


async def fetch_recalls(
    client: httpx.AsyncClient,
    food_name: str,
    today: date | None = None,
) -> list[FdaRecall]:
    if not food_name or not food_name.strip():
        return []

    url = build_recall_url(food_name, today=today)
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching FDA recalls for {food_name}: {e}")
        return []

    if not response.is_success:
        # openFDA answers 404 when nothing matches
        logger.error(f"FDA API request failed: {response.status_code} {response.reason_phrase}")
        return []

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"FDA API returned invalid JSON: {e}")
        return []

    try:
        return [FdaRecall.model_validate(r) for r in data.get("results") or []]
    except (AttributeError, ValidationError) as e:
        logger.error(f"FDA API returned unexpected results: {e}")
        return []
