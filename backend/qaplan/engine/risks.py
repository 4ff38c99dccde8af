"""Risk engine - coverage, feasibility, context-switching and capacity risk. Pure, no I/O."""
import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from qaplan.config import Settings, get_settings
from qaplan.engine.dates import Clock, is_date_in_range, to_date_str, today
from qaplan.engine.labels import get_work_item_label
from qaplan.schemas.allocation import Allocation
from qaplan.schemas.person import Person
from qaplan.schemas.risk import (
    CapacityRisk,
    ContextSwitchingRisk,
    CoverageRisk,
    FeasibilityRisk,
    RiskLevel,
    RiskReport,
    WeekInfo,
    WorkItemStatus,
)
from qaplan.schemas.scenario import PlanSnapshot
from qaplan.schemas.work_item import WorkItem

logger = logging.getLogger(__name__)


def classify_coverage(planned: float, required: float, red_ratio: float = 0.6) -> RiskLevel:
    """Red below red_ratio x required, yellow below required, else green."""
    if planned < red_ratio * required:
        return RiskLevel.RED
    if planned < required:
        return RiskLevel.YELLOW
    return RiskLevel.GREEN


def get_worst_risk(levels: Iterable[RiskLevel | str]) -> RiskLevel:
    """Worst of the given levels; green for an empty input."""
    worst = RiskLevel.GREEN
    for level in levels:
        level = RiskLevel(level)
        if level.rank > worst.rank:
            worst = level
    return worst


def _overlap_days(work_item: WorkItem, week: WeekInfo) -> list[date]:
    return [d for d in week.weekdays if is_date_in_range(d, work_item.start_date, work_item.end_date)]


def _index_by(allocations: Iterable[Allocation], attr: str) -> dict[str, list[Allocation]]:
    index: dict[str, list[Allocation]] = defaultdict(list)
    for a in allocations:
        index[getattr(a, attr)].append(a)
    return index


def _sum_days(allocations: Iterable[Allocation], dates: set[date]) -> float:
    return sum(a.days for a in allocations if a.date in dates)


class RiskEngine:
    """Stateless risk classification over a plan snapshot. Thresholds come from settings."""

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None) -> None:
        self.settings = settings or get_settings()
        self.clock = clock

    def coverage_risks(
        self,
        work_items: Sequence[WorkItem],
        allocations: Sequence[Allocation],
        weeks: Sequence[WeekInfo],
    ) -> list[CoverageRisk]:
        """One record per (work item, week) whose weekdays overlap the item's date range."""
        by_item = _index_by(allocations, "work_item_id")
        risks = []
        for wi in work_items:
            item_allocs = by_item.get(wi.id, [])
            for week in weeks:
                overlap = _overlap_days(wi, week)
                if not overlap:
                    continue
                planned = _sum_days(item_allocs, set(overlap))
                required = wi.required_min_days_per_week
                risks.append(
                    CoverageRisk(
                        work_item_id=wi.id,
                        week_start=to_date_str(week.week_start),
                        planned=planned,
                        required=required,
                        level=classify_coverage(planned, required, self.settings.coverage_red_ratio),
                    )
                )
        logger.debug("coverage: %d records for %d work items", len(risks), len(work_items))
        return risks

    def feasibility_risks(
        self,
        work_items: Sequence[WorkItem],
        allocations: Sequence[Allocation],
        weeks: Sequence[WeekInfo],
        now: date | None = None,
    ) -> list[FeasibilityRisk]:
        """
        Whole-remaining-window check per work item.

        Only overlap days on or after ``now`` count. Required effort is the weekly
        minimum times the number of weeks that still have such a day; items with
        nothing left in the window emit no record.
        """
        current = now or today(self.clock)
        by_item = _index_by(allocations, "work_item_id")
        risks = []
        for wi in work_items:
            remaining_dates: set[date] = set()
            remaining_weeks = 0
            for week in weeks:
                future = [d for d in _overlap_days(wi, week) if d >= current]
                if future:
                    remaining_weeks += 1
                    remaining_dates.update(future)
            if remaining_weeks == 0:
                continue
            remaining_required = wi.required_min_days_per_week * remaining_weeks
            remaining_planned = _sum_days(by_item.get(wi.id, []), remaining_dates)
            risks.append(
                FeasibilityRisk(
                    work_item_id=wi.id,
                    remaining_required=remaining_required,
                    remaining_planned=remaining_planned,
                    level=classify_coverage(remaining_planned, remaining_required, self.settings.coverage_red_ratio),
                )
            )
        logger.debug("feasibility: %d records", len(risks))
        return risks

    def context_switching_risks(
        self,
        people: Sequence[Person],
        allocations: Sequence[Allocation],
        weeks: Sequence[WeekInfo],
    ) -> list[ContextSwitchingRisk]:
        """Distinct work items per person-week. Green records are not emitted."""
        by_person = _index_by(allocations, "person_id")
        risks = []
        for person in people:
            person_allocs = by_person.get(person.id, [])
            for week in weeks:
                week_days = set(week.weekdays)
                distinct = len({a.work_item_id for a in person_allocs if a.date in week_days})
                if distinct >= self.settings.context_switch_red:
                    level = RiskLevel.RED
                elif distinct >= self.settings.context_switch_yellow:
                    level = RiskLevel.YELLOW
                else:
                    continue
                risks.append(
                    ContextSwitchingRisk(
                        person_id=person.id,
                        week_start=to_date_str(week.week_start),
                        distinct_work_items=distinct,
                        level=level,
                    )
                )
        logger.debug("context switching: %d records", len(risks))
        return risks

    def capacity_risks(
        self,
        people: Sequence[Person],
        allocations: Sequence[Allocation],
        weeks: Sequence[WeekInfo],
    ) -> list[CapacityRisk]:
        """
        Assigned days per person-week against fixed day thresholds.

        Red at or above capacity_red_days, yellow strictly above
        capacity_yellow_days. weekly_capacity_days is reported as ``cap`` but
        does not move the thresholds. Green records are not emitted.
        """
        by_person = _index_by(allocations, "person_id")
        risks = []
        for person in people:
            person_allocs = by_person.get(person.id, [])
            for week in weeks:
                assigned = _sum_days(person_allocs, set(week.weekdays))
                if assigned >= self.settings.capacity_red_days:
                    level = RiskLevel.RED
                elif assigned > self.settings.capacity_yellow_days:
                    level = RiskLevel.YELLOW
                else:
                    continue
                risks.append(
                    CapacityRisk(
                        person_id=person.id,
                        week_start=to_date_str(week.week_start),
                        assigned_days=assigned,
                        cap=person.weekly_capacity_days,
                        level=level,
                    )
                )
        logger.debug("capacity: %d records", len(risks))
        return risks

    def work_item_status(
        self,
        work_items: Sequence[WorkItem],
        coverage: Sequence[CoverageRisk],
        feasibility: Sequence[FeasibilityRisk],
    ) -> list[WorkItemStatus]:
        """Overall status per work item: worst of its coverage and feasibility levels."""
        levels: dict[str, list[RiskLevel]] = defaultdict(list)
        for risk in coverage:
            levels[risk.work_item_id].append(risk.level)
        for risk in feasibility:
            levels[risk.work_item_id].append(risk.level)
        return [
            WorkItemStatus(
                work_item_id=wi.id,
                label=get_work_item_label(wi),
                level=get_worst_risk(levels.get(wi.id, [])),
            )
            for wi in work_items
        ]

    def report(self, snapshot: PlanSnapshot, weeks: Sequence[WeekInfo], now: date | None = None) -> RiskReport:
        current = now or today(self.clock)
        coverage = self.coverage_risks(snapshot.work_items, snapshot.allocations, weeks)
        feasibility = self.feasibility_risks(snapshot.work_items, snapshot.allocations, weeks, current)
        return RiskReport(
            scenario_id=snapshot.scenario_id,
            weeks=list(weeks),
            coverage=coverage,
            feasibility=feasibility,
            context_switching=self.context_switching_risks(snapshot.people, snapshot.allocations, weeks),
            capacity=self.capacity_risks(snapshot.people, snapshot.allocations, weeks),
            work_item_status=self.work_item_status(snapshot.work_items, coverage, feasibility),
        )


def compute_coverage_risks(
    work_items: Sequence[WorkItem],
    allocations: Sequence[Allocation],
    weeks: Sequence[WeekInfo],
) -> list[CoverageRisk]:
    return RiskEngine().coverage_risks(work_items, allocations, weeks)


def compute_feasibility_risks(
    work_items: Sequence[WorkItem],
    allocations: Sequence[Allocation],
    weeks: Sequence[WeekInfo],
    now: date | None = None,
) -> list[FeasibilityRisk]:
    return RiskEngine().feasibility_risks(work_items, allocations, weeks, now)


def compute_context_switching_risks(
    people: Sequence[Person],
    allocations: Sequence[Allocation],
    weeks: Sequence[WeekInfo],
) -> list[ContextSwitchingRisk]:
    return RiskEngine().context_switching_risks(people, allocations, weeks)


def compute_capacity_risks(
    people: Sequence[Person],
    allocations: Sequence[Allocation],
    weeks: Sequence[WeekInfo],
) -> list[CapacityRisk]:
    return RiskEngine().capacity_risks(people, allocations, weeks)
