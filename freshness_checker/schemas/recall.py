from datetime import date, datetime

from pydantic import BaseModel, computed_field, field_validator


class FdaRecall(BaseModel):
    product_description: str = ""
    reason_for_recall: str = ""
    recall_initiation_date: str = ""
    recalling_firm: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    recall_number: str = ""

    model_config = {"extra": "ignore"}

    @field_validator(
        "product_description", "reason_for_recall", "recall_initiation_date",
        "recalling_firm", "city", "state", "country", "recall_number",
        mode="before",
    )
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

    @computed_field
    @property
    def initiation_date(self) -> date | None:
        """openFDA reports dates as YYYYMMDD strings."""
        try:
            return datetime.strptime(self.recall_initiation_date, "%Y%m%d").date()
        except ValueError:
            return None


class RecallSearchResponse(BaseModel):
    food_name: str
    recalls: list[FdaRecall]
