import httpx
from fastapi import APIRouter, Depends, Query

from freshness_checker.schemas.recall import RecallSearchResponse
from freshness_checker.services.recalls import fetch_recalls
from freshness_checker.utils.http import get_http_client

router = APIRouter()


@router.get("/", response_model=RecallSearchResponse)
async def search_recalls(
    food_name: str = Query(..., min_length=1),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    recalls = await fetch_recalls(http_client, food_name)
    return RecallSearchResponse(food_name=food_name, recalls=recalls)
