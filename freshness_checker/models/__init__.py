from freshness_checker.models.reminder import Reminder

__all__ = ["Reminder"]
