"""Tests for coverage, feasibility, context-switching and capacity risk."""

import pytest

from factories import MONDAY, day, make_allocation, make_person, make_weeks, make_work_item
from qaplan.config import Settings
from qaplan.engine.risks import (
    RiskEngine,
    classify_coverage,
    compute_capacity_risks,
    compute_context_switching_risks,
    compute_coverage_risks,
    compute_feasibility_risks,
    get_worst_risk,
)
from qaplan.schemas.risk import RiskLevel
from qaplan.schemas.scenario import PlanSnapshot


@pytest.fixture
def engine():
    return RiskEngine(settings=Settings(), clock=lambda: MONDAY)


def _allocate(person_id, work_item_id, days_per_date):
    """One allocation per (offset, days) pair."""
    return [make_allocation(person_id, work_item_id, day(offset), days) for offset, days in days_per_date]


class TestCoverageRisk:
    """Per work item, per overlapping week."""

    @pytest.mark.parametrize(
        "planned_days, expected",
        [
            ([(0, 1), (1, 1), (2, 1)], RiskLevel.YELLOW),  # 3 < 5 but 3 >= 3.0
            ([(0, 1), (1, 1), (2, 0.9)], RiskLevel.RED),  # 2.9 < 3.0
            ([(0, 1), (1, 1), (2, 1), (3, 1), (4, 1)], RiskLevel.GREEN),
        ],
    )
    def test_threshold_boundaries(self, engine, planned_days, expected):
        wi = make_work_item("w1", required=5)
        risks = engine.coverage_risks([wi], _allocate("p1", "w1", planned_days), make_weeks())
        assert len(risks) == 1
        assert risks[0].level == expected
        assert risks[0].required == 5

    def test_staffing_up_a_week(self, engine):
        """2 days is red, 3 is yellow, 5 is green."""
        wi = make_work_item("w1", required=5)
        weeks = make_weeks()
        allocations = _allocate("p1", "w1", [(0, 1), (1, 1)])
        assert engine.coverage_risks([wi], allocations, weeks)[0].level == RiskLevel.RED

        allocations += _allocate("p2", "w1", [(2, 1)])
        assert engine.coverage_risks([wi], allocations, weeks)[0].level == RiskLevel.YELLOW

        allocations += _allocate("p2", "w1", [(3, 1), (4, 1)])
        risk = engine.coverage_risks([wi], allocations, weeks)[0]
        assert risk.level == RiskLevel.GREEN
        assert risk.planned == 5

    def test_skips_weeks_without_overlap(self, engine):
        wi = make_work_item("w1", start=day(7), end=day(11))
        risks = engine.coverage_risks([wi], [], make_weeks(3))
        assert [r.week_start for r in risks] == ["2026-10-26"]
        assert risks[0].level == RiskLevel.RED

    def test_only_overlap_days_count(self, engine):
        wi = make_work_item("w1", start=day(2), end=day(4), required=2)
        allocations = _allocate("p1", "w1", [(0, 1), (1, 1), (2, 1)])
        risk = engine.coverage_risks([wi], allocations, make_weeks())[0]
        assert risk.planned == 1
        assert risk.level == RiskLevel.RED

    def test_other_items_and_dangling_allocations_ignored(self, engine):
        wi = make_work_item("w1", required=1)
        allocations = _allocate("p1", "w2", [(0, 1)]) + _allocate("p1", "missing", [(1, 1)])
        risk = engine.coverage_risks([wi], allocations, make_weeks())[0]
        assert risk.planned == 0

    def test_inverted_range_never_overlaps(self, engine):
        wi = make_work_item("w1", start=day(4), end=day(0))
        assert engine.coverage_risks([wi], [], make_weeks(2)) == []

    def test_zero_required_is_green(self):
        assert classify_coverage(0, 0) == RiskLevel.GREEN


class TestFeasibilityRisk:
    """Whole remaining window per work item."""

    def test_item_in_the_past_has_no_record(self, engine):
        wi = make_work_item("w1", start=day(-14), end=day(-10))
        assert engine.feasibility_risks([wi], [], make_weeks(4), now=MONDAY) == []

    def test_required_scales_with_remaining_weeks(self, engine):
        wi = make_work_item("w1", start=MONDAY, end=day(18), required=2)
        allocations = _allocate("p1", "w1", [(0, 1), (1, 1), (7, 1), (8, 1)])
        risk = engine.feasibility_risks([wi], allocations, make_weeks(4), now=MONDAY)[0]
        assert risk.remaining_required == 6
        assert risk.remaining_planned == 4
        assert risk.level == RiskLevel.YELLOW

    def test_elapsed_days_do_not_count(self, engine):
        wi = make_work_item("w1", required=2)
        allocations = _allocate("p1", "w1", [(0, 1), (1, 1), (3, 1)])
        risk = engine.feasibility_risks([wi], allocations, make_weeks(), now=day(3))[0]
        assert risk.remaining_required == 2
        assert risk.remaining_planned == 1
        assert risk.level == RiskLevel.RED

    def test_uses_injected_clock(self):
        wi = make_work_item("w1")
        engine = RiskEngine(settings=Settings(), clock=lambda: day(30))
        assert engine.feasibility_risks([wi], [], make_weeks()) == []

    def test_module_function_accepts_now(self):
        wi = make_work_item("w1", required=1)
        risks = compute_feasibility_risks([wi], _allocate("p1", "w1", [(4, 1)]), make_weeks(), now=MONDAY)
        assert risks[0].level == RiskLevel.GREEN


class TestContextSwitchingRisk:
    """Distinct work items per person-week."""

    @pytest.mark.parametrize("distinct, expected", [(3, None), (4, RiskLevel.YELLOW), (5, RiskLevel.YELLOW), (6, RiskLevel.RED)])
    def test_thresholds(self, engine, distinct, expected):
        person = make_person("p1")
        allocations = [make_allocation("p1", f"w{i}", day(i % 5), 0.5) for i in range(distinct)]
        risks = engine.context_switching_risks([person], allocations, make_weeks())
        if expected is None:
            assert risks == []
        else:
            assert risks[0].level == expected
            assert risks[0].distinct_work_items == distinct
            assert risks[0].week_start == "2026-10-19"

    def test_weekend_allocations_ignored(self, engine):
        person = make_person("p1")
        allocations = [make_allocation("p1", f"w{i}", day(5)) for i in range(6)]
        assert engine.context_switching_risks([person], allocations, make_weeks()) == []


class TestCapacityRisk:
    """Fixed day thresholds, independent of weekly_capacity_days."""

    @pytest.mark.parametrize(
        "assigned, expected",
        [(5, None), (5.01, RiskLevel.YELLOW), (5.5, RiskLevel.YELLOW), (6, RiskLevel.RED)],
    )
    def test_thresholds(self, engine, assigned, expected):
        person = make_person("p1", weekly_capacity_days=3)
        allocations = [make_allocation("p1", "w1", day(0), assigned - 4)]
        allocations += [make_allocation("p1", "w1", day(i)) for i in range(1, 5)]
        risks = engine.capacity_risks([person], allocations, make_weeks())
        if expected is None:
            assert risks == []
        else:
            assert risks[0].level == expected
            assert risks[0].assigned_days == pytest.approx(assigned)
            assert risks[0].cap == 3

    def test_thresholds_come_from_settings(self):
        engine = RiskEngine(settings=Settings(capacity_yellow_days=2, capacity_red_days=3))
        person = make_person("p1")
        allocations = [make_allocation("p1", "w1", day(i)) for i in range(3)]
        assert engine.capacity_risks([person], allocations, make_weeks())[0].level == RiskLevel.RED


class TestWorstRisk:
    def test_reduction(self):
        assert get_worst_risk(["green", "yellow", "green"]) == RiskLevel.YELLOW
        assert get_worst_risk([]) == RiskLevel.GREEN
        assert get_worst_risk(["red", "red"]) == RiskLevel.RED
        assert get_worst_risk([RiskLevel.YELLOW, RiskLevel.RED]) == RiskLevel.RED

    def test_work_item_status_combines_coverage_and_feasibility(self, engine):
        ok = make_work_item("ok", pod_id="pod-ww", required=1)
        short = make_work_item("short", pod_id="pod-ps", required=5)
        allocations = _allocate("p1", "ok", [(0, 1)]) + _allocate("p1", "short", [(0, 1), (1, 1), (2, 1)])
        weeks = make_weeks()
        coverage = engine.coverage_risks([ok, short], allocations, weeks)
        feasibility = engine.feasibility_risks([ok, short], allocations, weeks, now=MONDAY)
        status = {s.work_item_id: s for s in engine.work_item_status([ok, short], coverage, feasibility)}
        assert status["ok"].level == RiskLevel.GREEN
        assert status["short"].level == RiskLevel.YELLOW
        assert status["short"].label == "PS: Item short"


class TestEngineContract:
    """Empty inputs, purity and determinism."""

    def test_empty_weeks_give_empty_results(self):
        wi = make_work_item("w1")
        person = make_person("p1")
        allocations = _allocate("p1", "w1", [(0, 1)])
        assert compute_coverage_risks([wi], allocations, []) == []
        assert compute_feasibility_risks([wi], allocations, [], now=MONDAY) == []
        assert compute_context_switching_risks([person], allocations, []) == []
        assert compute_capacity_risks([person], allocations, []) == []

    def test_repeated_calls_are_identical(self, engine):
        items = [make_work_item(f"w{i}", start=day(7 * i)) for i in range(3)]
        people = [make_person("p1"), make_person("p2")]
        allocations = [make_allocation(p.id, wi.id, wi.start_date) for p in people for wi in items]
        allocations += [make_allocation("p1", f"x{i}", day(1)) for i in range(4)]
        weeks = make_weeks(4)
        snapshot = PlanSnapshot(scenario_id="s1", people=people, work_items=items, allocations=allocations)

        first = engine.report(snapshot, weeks, MONDAY)
        second = engine.report(snapshot, weeks, MONDAY)
        assert first.model_dump() == second.model_dump()
        assert [r.level for r in first.context_switching] == [RiskLevel.YELLOW]
        assert len(first.coverage) == 3
