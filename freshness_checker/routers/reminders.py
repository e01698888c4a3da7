from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from freshness_checker.database import get_db
from freshness_checker.schemas.reminder import (
    ReminderCreate, ReminderResponse, DueReminder,
    EstimateRequest, EstimateResponse,
)
from freshness_checker.services.freshness_ai import FreshnessAI, get_freshness_ai
from freshness_checker.services.reminders import (
    add_reminder,
    remove_reminder,
    list_reminders,
    get_due_reminders,
    reminder_message,
)

router = APIRouter()


@router.get("/", response_model=list[ReminderResponse])
def list_all(db: Session = Depends(get_db)):
    return list_reminders(db)


@router.post("/", response_model=ReminderResponse, status_code=201)
def create_reminder(body: ReminderCreate, db: Session = Depends(get_db)):
    return add_reminder(db, body.name, body.spoilage_date)


@router.get("/due", response_model=list[DueReminder])
def due_reminders(db: Session = Depends(get_db)):
    return [
        DueReminder(
            id=r.id,
            name=r.name,
            spoilage_date=r.spoilage_date,
            created_at=r.created_at,
            message=reminder_message(r),
        )
        for r in get_due_reminders(db)
    ]


@router.post("/estimate", response_model=EstimateResponse)
async def estimate_and_remind(
    body: EstimateRequest,
    db: Session = Depends(get_db),
    ai: FreshnessAI = Depends(get_freshness_ai),
):
    """Estimate when the food spoils and set a reminder for the end of that range."""
    estimate = await ai.estimate_spoilage(body.food_name, body.purchase_date)
    reminder = add_reminder(db, body.food_name, estimate.end_date)
    return EstimateResponse(
        estimate=estimate,
        reminder=ReminderResponse.model_validate(reminder),
    )


@router.delete("/{reminder_id}", status_code=204)
def dismiss_reminder(reminder_id: UUID, db: Session = Depends(get_db)):
    if not remove_reminder(db, reminder_id):
        raise HTTPException(status_code=404, detail="Reminder not found")
