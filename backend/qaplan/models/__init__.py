"""SQLAlchemy models."""
from qaplan.models.person import Person
from qaplan.models.pod import Pod
from qaplan.models.scenario import Allocation, Scenario, TimeOff, WorkItem

__all__ = [
    "Allocation",
    "Person",
    "Pod",
    "Scenario",
    "TimeOff",
    "WorkItem",
]
