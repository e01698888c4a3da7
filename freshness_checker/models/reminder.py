from sqlalchemy import Column, String, Date

from freshness_checker.database import Base, BaseMixin


class Reminder(BaseMixin, Base):
    __tablename__ = "reminders"

    name = Column(String, nullable=False)
    spoilage_date = Column(Date, nullable=False, index=True)
