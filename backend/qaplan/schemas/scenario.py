"""Scenario, snapshot and export document schemas."""
from pydantic import Field

from qaplan.schemas.allocation import Allocation, TimeOff
from qaplan.schemas.common import PlanInput, PlanModel
from qaplan.schemas.person import Person
from qaplan.schemas.pod import Pod
from qaplan.schemas.work_item import WorkItem


class Scenario(PlanModel):
    id: str
    name: str
    is_base: bool = False


class ScenarioDuplicate(PlanInput):
    name: str = Field(..., min_length=1, max_length=255)


class ScenarioData(PlanModel):
    """One scenario with its own work items, allocations and time off."""

    scenario: Scenario
    allocations: list[Allocation] = []
    work_items: list[WorkItem] = []
    time_offs: list[TimeOff] = []


class AppData(PlanModel):
    """Full export document. People and pods are shared across scenarios."""

    pods: list[Pod] = []
    people: list[Person] = []
    scenarios: list[ScenarioData] = []


class PlanSnapshot(PlanModel):
    """Everything the engine needs for one scenario."""

    scenario_id: str
    pods: list[Pod] = []
    people: list[Person] = []
    work_items: list[WorkItem] = []
    allocations: list[Allocation] = []
    time_offs: list[TimeOff] = []


class ImportResult(PlanInput):
    scenario_id: str | None
    pods: int
    people: int
    scenarios: int
