"""Work item schemas."""
from datetime import date
from enum import Enum

from pydantic import Field, model_validator

from qaplan.schemas.common import PlanInput, PlanModel


class WorkItemType(str, Enum):
    FEATURE = "feature"
    INITIATIVE = "initiative"


class WorkItem(PlanModel):
    """Planned work owned by a pod. ``end_date`` is inclusive."""

    id: str
    type: WorkItemType
    name: str
    pod_id: str
    start_date: date
    end_date: date
    required_min_days_per_week: float
    release_date: date | None = None
    notes: str | None = None


class WorkItemCreate(PlanInput):
    id: str | None = Field(default=None, max_length=64)
    type: WorkItemType = WorkItemType.FEATURE
    name: str = Field(..., min_length=1, max_length=255)
    pod_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    required_min_days_per_week: float = Field(..., ge=0, le=35)
    release_date: date | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class WorkItemUpdate(PlanInput):
    type: WorkItemType | None = None
    name: str | None = None
    pod_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    required_min_days_per_week: float | None = Field(default=None, ge=0, le=35)
    release_date: date | None = None
    notes: str | None = None
