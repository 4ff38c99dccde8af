"""Roster grouping schemas."""
from qaplan.schemas.common import PlanModel
from qaplan.schemas.person import Person
from qaplan.schemas.pod import Pod


class PodSubgroup(PlanModel):
    pod: Pod
    people: list[Person]


class PodGroup(PlanModel):
    """Roster section. ``lead`` is None for the catch-all unassigned group."""

    lead: Person | None
    label: str
    pods: list[PodSubgroup]


class GroupWeeklySummary(PlanModel):
    assigned_days: float
    total_cap_days: float
    red_count: int
    yellow_count: int


class PodDays(PlanModel):
    pod_id: str
    days: float
    is_cross_pod: bool


class RosterGroup(PlanModel):
    group: PodGroup
    summary: GroupWeeklySummary


class RosterResponse(PlanModel):
    scenario_id: str
    week_start: str
    groups: list[RosterGroup]
