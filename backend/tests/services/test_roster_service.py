"""Tests for the planning window and roster built from stored data."""

import pytest

from factories import MONDAY, day
from qaplan.exceptions import PlanValidationError
from qaplan.services import roster_service
from qaplan.services.seed_service import seed_if_empty


class TestPlanningWeeks:
    def test_default_length_from_settings(self):
        assert len(roster_service.planning_weeks(MONDAY)) == 12

    def test_explicit_zero_weeks(self):
        assert roster_service.planning_weeks(MONDAY, num_weeks=0) == []

    def test_explicit_length(self):
        weeks = roster_service.planning_weeks(day(3), num_weeks=2)
        assert [w.week_start for w in weeks] == [MONDAY, day(7)]


class TestRoster:
    @pytest.mark.asyncio
    async def test_week_index_out_of_range(self, db_session):
        await seed_if_empty(db_session, today=MONDAY)
        with pytest.raises(PlanValidationError):
            await roster_service.roster(db_session, "scenario-base", week_index=12, today=MONDAY)

    @pytest.mark.asyncio
    async def test_seeded_roster(self, db_session):
        await seed_if_empty(db_session, today=MONDAY)
        response = await roster_service.roster(db_session, "scenario-base", week_index=1, today=MONDAY)
        assert response.week_start == day(7).isoformat()
        assert response.groups[0].group.label == "QA Lead: Emily"
        assert response.groups[-1].summary.assigned_days == 0
