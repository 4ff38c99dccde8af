"""Tests for the demo plan."""

import pytest

from factories import MONDAY, day
from qaplan.config import Settings
from qaplan.engine.dates import get_planning_weeks
from qaplan.engine.grouping import UNASSIGNED_LABEL, build_pod_groups
from qaplan.engine.risks import RiskEngine
from qaplan.schemas.person import PersonRole
from qaplan.schemas.scenario import PlanSnapshot
from qaplan.services import scenario_service
from qaplan.services.seed_service import (
    FLOATING_VENDORS,
    SEED_PODS,
    build_seed_data,
    build_seed_people,
    seed_if_empty,
)


class TestSeedData:
    def test_people(self):
        people = build_seed_people()
        assert len(people) == 1 + 4 + 18
        assert [p.role for p in people].count(PersonRole.QA_LEAD) == 1
        assert len({p.id for p in people}) == len(people)

    def test_allocations_anchor_to_week(self):
        data = build_seed_data(day(2))
        base = data.scenarios[0]
        assert base.scenario.is_base
        assert min(a.date for a in base.allocations) == MONDAY
        assert all(a.date.weekday() < 5 for a in base.allocations)
        off = {(t.person_id, t.date) for t in base.time_offs}
        assert not any((a.person_id, a.date) in off for a in base.allocations)

    def test_groups_cover_every_person(self):
        data = build_seed_data(MONDAY)
        groups = build_pod_groups(data.people, SEED_PODS, lead_pod_map=Settings().lead_pod_map, affinity="home_pod")
        labels = [g.label for g in groups]
        assert labels[0] == "QA Lead: Emily"
        assert "TINPOZ + ServerScapes (Lead: Kawika)" in labels
        assert labels[-1] == UNASSIGNED_LABEL
        floating = [p.id for sg in groups[0].pods for p in sg.people if p.role == PersonRole.TESTER]
        assert len(floating) == len(FLOATING_VENDORS)
        placed = [p.id for g in groups for sg in g.pods for p in sg.people]
        assert sorted(placed) == sorted(p.id for p in data.people)

    def test_floating_vendors_switch_context(self):
        data = build_seed_data(MONDAY)
        base = data.scenarios[0]
        snapshot = PlanSnapshot(
            scenario_id=base.scenario.id,
            people=data.people,
            work_items=base.work_items,
            allocations=base.allocations,
        )
        report = RiskEngine(settings=Settings()).report(snapshot, get_planning_weeks(1, now=MONDAY), MONDAY)
        flagged = {r.person_id for r in report.context_switching}
        assert flagged == {f"person-vendor-{n:02d}" for n in FLOATING_VENDORS}


class TestSeedIfEmpty:
    @pytest.mark.asyncio
    async def test_seeds_once(self, db_session):
        assert await seed_if_empty(db_session, today=MONDAY) is True
        assert await seed_if_empty(db_session, today=MONDAY) is False
        scenarios = await scenario_service.list_scenarios(db_session)
        assert [s.name for s in scenarios] == ["Base Plan"]
