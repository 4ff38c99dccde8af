"""Engine results for a stored scenario: planning window, risk report, roster groups."""
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from qaplan.config import get_settings
from qaplan.engine.dates import get_planning_weeks
from qaplan.engine.grouping import build_pod_groups, compute_group_weekly_summary
from qaplan.engine.risks import RiskEngine
from qaplan.exceptions import PlanValidationError
from qaplan.schemas.risk import RiskReport, WeekInfo
from qaplan.schemas.roster import RosterGroup, RosterResponse
from qaplan.services.planning_service import load_snapshot


def planning_weeks(today: date | None = None, num_weeks: int | None = None) -> list[WeekInfo]:
    if num_weeks is None:
        num_weeks = get_settings().planning_weeks
    return get_planning_weeks(num_weeks, now=today)


async def risk_report(db: AsyncSession, scenario_id: str, today: date | None = None) -> RiskReport:
    snapshot = await load_snapshot(db, scenario_id)
    now = today or date.today()
    return RiskEngine().report(snapshot, planning_weeks(now), now)


async def roster(
    db: AsyncSession,
    scenario_id: str,
    week_index: int = 0,
    today: date | None = None,
    include_archived: bool = False,
) -> RosterResponse:
    """Pod groups with a weekly summary per group for the selected planning week."""
    weeks = planning_weeks(today)
    if not 0 <= week_index < len(weeks):
        raise PlanValidationError(f"week_index must be between 0 and {len(weeks) - 1}")
    week = weeks[week_index]
    snapshot = await load_snapshot(db, scenario_id)
    people = [p for p in snapshot.people if include_archived or p.is_active]
    groups = build_pod_groups(people, snapshot.pods, snapshot.allocations, snapshot.work_items)
    return RosterResponse(
        scenario_id=scenario_id,
        week_start=week.week_start_str,
        groups=[
            RosterGroup(
                group=g,
                summary=compute_group_weekly_summary(g, snapshot.allocations, snapshot.work_items, week),
            )
            for g in groups
        ],
    )
