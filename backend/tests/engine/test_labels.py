"""Tests for pod and work item display helpers."""

from factories import day, make_allocation, make_person, make_pod, make_weeks, make_work_item
from qaplan.engine.labels import (
    NEUTRAL_COLOR,
    UNKNOWN_LABEL,
    get_pod_color,
    get_pod_name,
    get_pod_prefix,
    get_weekly_pod_breakdown,
    get_work_item_label,
    get_work_item_label_by_id,
    is_cross_pod_allocation,
)


class TestLabels:
    def test_pod_prefix(self):
        assert get_pod_prefix("pod-ww") == "WW"
        assert get_pod_prefix("mobile") == "MO"

    def test_pod_color(self):
        assert get_pod_color("pod-ss") == "#10b981"
        assert get_pod_color("pod-unknown") == NEUTRAL_COLOR
        assert get_pod_color(None) == NEUTRAL_COLOR

    def test_work_item_label(self):
        wi = make_work_item("w1", pod_id="pod-la")
        assert get_work_item_label(wi) == "LA: Item w1"
        assert get_work_item_label_by_id([wi], "w1") == "LA: Item w1"
        assert get_work_item_label_by_id([wi], "nope") == UNKNOWN_LABEL

    def test_pod_name(self):
        pods = [make_pod("pod-a", "Alpha")]
        assert get_pod_name(pods, "pod-a") == "Alpha"
        assert get_pod_name(pods, "pod-z") == "pod-z"


class TestCrossPod:
    def test_cross_pod_needs_home_pod(self):
        wi = make_work_item("w1", pod_id="pod-b")
        assert is_cross_pod_allocation(make_person("t", home_pod_id="pod-a"), wi)
        assert not is_cross_pod_allocation(make_person("t", home_pod_id="pod-b"), wi)
        assert not is_cross_pod_allocation(make_person("t"), wi)


class TestWeeklyPodBreakdown:
    """Days per pod for one person-week."""

    def test_sorted_by_days_with_stable_ties(self):
        person = make_person("t", home_pod_id="pod-a")
        items = [
            make_work_item("wa", pod_id="pod-a"),
            make_work_item("wb", pod_id="pod-b"),
            make_work_item("wc", pod_id="pod-c"),
        ]
        allocations = [
            make_allocation("t", "wc", day(0)),
            make_allocation("t", "wa", day(1)),
            make_allocation("t", "wb", day(2)),
            make_allocation("t", "wb", day(3)),
            make_allocation("t", "missing", day(4)),
            make_allocation("other", "wa", day(4)),
            make_allocation("t", "wa", day(7)),
        ]
        breakdown = get_weekly_pod_breakdown(person, allocations, items, make_weeks()[0])
        assert [(b.pod_id, b.days, b.is_cross_pod) for b in breakdown] == [
            ("pod-b", 2, True),
            ("pod-c", 1, True),
            ("pod-a", 1, False),
        ]

    def test_no_home_pod_is_never_cross_pod(self):
        person = make_person("t")
        items = [make_work_item("wa", pod_id="pod-a")]
        breakdown = get_weekly_pod_breakdown(person, [make_allocation("t", "wa", day(0), 0.5)], items, make_weeks()[0])
        assert [(b.pod_id, b.days, b.is_cross_pod) for b in breakdown] == [("pod-a", 0.5, False)]
