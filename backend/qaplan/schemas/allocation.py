"""Allocation and time-off schemas."""
import datetime as dt

from pydantic import Field

from qaplan.schemas.common import PlanInput, PlanModel


class Allocation(PlanModel):
    """One person assigned to one work item on one date."""

    id: str
    person_id: str
    work_item_id: str
    date: dt.date
    days: float = 1.0


class AllocationCreate(PlanInput):
    id: str | None = None
    person_id: str
    work_item_id: str
    date: dt.date
    days: float = Field(default=1.0, gt=0, le=1)


class AllocationBulkCreate(PlanInput):
    allocations: list[AllocationCreate] = Field(..., min_length=1)


class ClearAllocationsRequest(PlanInput):
    person_id: str
    start_date: dt.date
    end_date: dt.date


class ClearAllocationsResponse(PlanInput):
    removed: int


class TimeOff(PlanModel):
    id: str
    person_id: str
    date: dt.date
    reason: str | None = None


class TimeOffCreate(PlanInput):
    id: str | None = None
    person_id: str
    date: dt.date
    reason: str | None = Field(default=None, max_length=255)
