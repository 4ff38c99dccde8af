"""Person schemas."""
from datetime import date
from enum import Enum

from pydantic import Field

from qaplan.schemas.common import PlanInput, PlanModel


class PersonRole(str, Enum):
    QA_LEAD = "qa_lead"
    POD_LEAD = "pod_lead"
    TESTER = "tester"


class PersonType(str, Enum):
    INTERNAL = "internal"
    VENDOR = "vendor"


class PersonStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class Person(PlanModel):
    id: str
    name: str
    role: PersonRole
    type: PersonType
    home_pod_id: str | None = None
    lead_id: str | None = None
    weekly_capacity_days: float = 5
    status: PersonStatus = PersonStatus.ACTIVE
    archived_at: date | None = None
    default_pod_filter_ids: list[str] | None = None

    @property
    def is_active(self) -> bool:
        return self.status == PersonStatus.ACTIVE


class PersonCreate(PlanInput):
    id: str | None = Field(default=None, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    role: PersonRole = PersonRole.TESTER
    type: PersonType = PersonType.INTERNAL
    home_pod_id: str | None = None
    lead_id: str | None = None
    weekly_capacity_days: float = Field(default=5, ge=0, le=7)
    default_pod_filter_ids: list[str] | None = None


class PersonUpdate(PlanInput):
    name: str | None = None
    role: PersonRole | None = None
    type: PersonType | None = None
    home_pod_id: str | None = None
    lead_id: str | None = None
    weekly_capacity_days: float | None = Field(default=None, ge=0, le=7)
    default_pod_filter_ids: list[str] | None = None
