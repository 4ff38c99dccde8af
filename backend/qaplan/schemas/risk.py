"""Planning window and risk record schemas."""
import datetime as dt
from enum import Enum

from qaplan.schemas.common import PlanModel


class RiskLevel(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.GREEN: 0, RiskLevel.YELLOW: 1, RiskLevel.RED: 2}


class WeekInfo(PlanModel):
    """Monday-anchored week with its five weekdays."""

    week_start: dt.date
    week_start_str: str
    week_label: str
    weekdays: list[dt.date]


class CoverageRisk(PlanModel):
    work_item_id: str
    week_start: str
    planned: float
    required: float
    level: RiskLevel


class FeasibilityRisk(PlanModel):
    work_item_id: str
    remaining_required: float
    remaining_planned: float
    level: RiskLevel


class ContextSwitchingRisk(PlanModel):
    person_id: str
    week_start: str
    distinct_work_items: int
    level: RiskLevel


class CapacityRisk(PlanModel):
    person_id: str
    week_start: str
    assigned_days: float
    cap: float
    level: RiskLevel


class WorkItemStatus(PlanModel):
    work_item_id: str
    label: str
    level: RiskLevel


class RiskReport(PlanModel):
    scenario_id: str
    weeks: list[WeekInfo]
    coverage: list[CoverageRisk]
    feasibility: list[FeasibilityRisk]
    context_switching: list[ContextSwitchingRisk]
    capacity: list[CapacityRisk]
    work_item_status: list[WorkItemStatus] = []
