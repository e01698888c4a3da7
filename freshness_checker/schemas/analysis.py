from datetime import date
from typing import Literal

from pydantic import BaseModel

from freshness_checker.schemas.recall import FdaRecall

NO_FOOD_DETECTED = "No food detected"

FreshnessStatus = Literal["Fresh", "Spoiled", "Unsure", "N/A"]


class AnalysisResult(BaseModel):
    food_name: str
    is_spoiled: FreshnessStatus
    explanation: str
    sensory_checks: str = ""

    @property
    def food_detected(self) -> bool:
        return self.is_spoiled != "N/A" and bool(self.food_name.strip())


class CheckResult(BaseModel):
    analysis: AnalysisResult
    food_detected: bool
    spoiled_images: list[str] = []
    recalls: list[FdaRecall] = []


class SpoilageEstimate(BaseModel):
    start_date: date
    end_date: date


class StorageAdviceRequest(BaseModel):
    food_name: str
    storage_method: str


class StorageAdvice(BaseModel):
    is_optimal: bool
    optimal_method: str
    shelf_life_extension: str
