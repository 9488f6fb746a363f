import enum
from datetime import datetime

from pydantic import BaseModel, computed_field

from models import VoteChoice


class RecordResult(str, enum.Enum):
    INSERTED = "inserted"
    IGNORED = "ignored"


def percent(count: int, total: int) -> int:
    """Whole-number share of count in total, rounded half up; 0 when nothing was counted."""
    if not total:
        return 0
    return (200 * count + total) // (2 * total)


class VoteAggregate(BaseModel):
    total: int = 0
    agree: int = 0
    oppose: int = 0

    @computed_field
    @property
    def agree_percent(self) -> int:
        return percent(self.agree, self.total)

    @computed_field
    @property
    def oppose_percent(self) -> int:
        return percent(self.oppose, self.total)


class VoteRow(BaseModel):
    ip: str
    choice: VoteChoice
    created_at: datetime

    model_config = {"from_attributes": True}
