"""
Checks Router: photo freshness checks.

Endpoints:
  POST /                 analyze an uploaded photo, add reference images and recalls
  POST /storage-advice   is this food stored the best way?
"""

import base64

import httpx
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from freshness_checker.config import get_settings
from freshness_checker.schemas.analysis import CheckResult, StorageAdvice, StorageAdviceRequest
from freshness_checker.services.checks import run_check
from freshness_checker.services.freshness_ai import FreshnessAI, get_freshness_ai
from freshness_checker.services.spoiled_images import SpoiledImageGenerator, get_spoiled_image_generator
from freshness_checker.utils.http import get_http_client

router = APIRouter()


@router.post("/", response_model=CheckResult)
async def check_freshness(
    file: UploadFile = File(...),
    ai: FreshnessAI = Depends(get_freshness_ai),
    images: SpoiledImageGenerator = Depends(get_spoiled_image_generator),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    media_type = file.content_type or ""
    if not media_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Upload must be an image")

    max_bytes = get_settings().MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if file.size is not None and file.size > max_bytes:
        raise HTTPException(status_code=413, detail="Image is too large")

    # Never buffer more than one byte past the limit
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(status_code=413, detail="Image is too large")
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded image is empty")

    image_base64 = base64.b64encode(content).decode("ascii")
    return await run_check(ai, images, http_client, image_base64, media_type)


@router.post("/storage-advice", response_model=StorageAdvice)
async def storage_advice(
    body: StorageAdviceRequest,
    ai: FreshnessAI = Depends(get_freshness_ai),
):
    return await ai.storage_advice(body.food_name, body.storage_method)
