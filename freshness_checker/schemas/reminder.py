from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from freshness_checker.schemas.analysis import SpoilageEstimate


class ReminderCreate(BaseModel):
    name: str = Field(min_length=1)
    spoilage_date: date


class ReminderResponse(BaseModel):
    id: UUID
    name: str
    spoilage_date: date
    created_at: datetime

    model_config = {"from_attributes": True}


class DueReminder(ReminderResponse):
    message: str


class EstimateRequest(BaseModel):
    food_name: str = Field(min_length=1)
    purchase_date: date


class EstimateResponse(BaseModel):
    estimate: SpoilageEstimate
    reminder: ReminderResponse
