"""Pydantic schemas."""
from qaplan.schemas.allocation import Allocation, AllocationCreate, TimeOff, TimeOffCreate
from qaplan.schemas.person import Person, PersonCreate, PersonRole, PersonStatus, PersonType, PersonUpdate
from qaplan.schemas.pod import Pod, PodCreate
from qaplan.schemas.risk import (
    CapacityRisk,
    ContextSwitchingRisk,
    CoverageRisk,
    FeasibilityRisk,
    RiskLevel,
    RiskReport,
    WeekInfo,
)
from qaplan.schemas.roster import GroupWeeklySummary, PodDays, PodGroup, PodSubgroup
from qaplan.schemas.scenario import AppData, PlanSnapshot, Scenario, ScenarioData
from qaplan.schemas.work_item import WorkItem, WorkItemCreate, WorkItemType, WorkItemUpdate

__all__ = [
    "Allocation",
    "AllocationCreate",
    "TimeOff",
    "TimeOffCreate",
    "Person",
    "PersonCreate",
    "PersonRole",
    "PersonStatus",
    "PersonType",
    "PersonUpdate",
    "Pod",
    "PodCreate",
    "CapacityRisk",
    "ContextSwitchingRisk",
    "CoverageRisk",
    "FeasibilityRisk",
    "RiskLevel",
    "RiskReport",
    "WeekInfo",
    "GroupWeeklySummary",
    "PodDays",
    "PodGroup",
    "PodSubgroup",
    "AppData",
    "PlanSnapshot",
    "Scenario",
    "ScenarioData",
    "WorkItem",
    "WorkItemCreate",
    "WorkItemType",
    "WorkItemUpdate",
]
