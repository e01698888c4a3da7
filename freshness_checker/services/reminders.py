"""
Reminder Service: stores spoilage reminders and picks out the ones that are
spoiling soon.
"""

from datetime import date, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from freshness_checker.config import get_settings
from freshness_checker.models.reminder import Reminder


def add_reminder(db: Session, name: str, spoilage_date: date) -> Reminder:
    reminder = Reminder(name=name, spoilage_date=spoilage_date)
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def remove_reminder(db: Session, reminder_id: UUID) -> bool:
    """Delete a reminder. Returns False when it does not exist."""
    reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
    if not reminder:
        return False
    db.delete(reminder)
    db.commit()
    return True


def list_reminders(db: Session) -> list[Reminder]:
    return db.query(Reminder).order_by(
        Reminder.spoilage_date.asc(), Reminder.created_at.asc()
    ).all()


def reminder_message(reminder: Reminder) -> str:
    return f"Your {reminder.name} is spoiling soon (by {reminder.spoilage_date.isoformat()})!"


def get_due_reminders(db: Session, today: date | None = None) -> list[Reminder]:
    """
    Reminders whose spoilage date falls between today and the end of the
    reminder window, both inclusive. Past-due reminders are not returned.
    """
    today = today or date.today()
    window_end = today + timedelta(days=get_settings().REMINDER_WINDOW_DAYS)
    return db.query(Reminder).filter(
        Reminder.spoilage_date >= today,
        Reminder.spoilage_date <= window_end,
    ).order_by(Reminder.spoilage_date.asc()).all()
