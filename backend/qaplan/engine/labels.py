"""Display lookups shared by the engine and the client: pod prefixes, colors, labels."""
from collections.abc import Sequence

from qaplan.schemas.allocation import Allocation
from qaplan.schemas.person import Person
from qaplan.schemas.pod import Pod
from qaplan.schemas.risk import WeekInfo
from qaplan.schemas.roster import PodDays
from qaplan.schemas.work_item import WorkItem

UNKNOWN_LABEL = "Unknown"
NEUTRAL_COLOR = "#9ca3af"

POD_PREFIXES: dict[str, str] = {
    "pod-ww": "WW",
    "pod-ps": "PS",
    "pod-tp": "TP",
    "pod-ss": "SS",
    "pod-la": "LA",
    "pod-qa": "QA",
}

POD_COLORS: dict[str, str] = {
    "pod-ww": "#6366f1",
    "pod-ps": "#0ea5e9",
    "pod-tp": "#f59e0b",
    "pod-ss": "#10b981",
    "pod-la": "#ec4899",
    "pod-qa": "#8b5cf6",
}


def get_pod_prefix(pod_id: str) -> str:
    return POD_PREFIXES.get(pod_id) or pod_id[:2].upper()


def get_pod_color(pod_id: str | None) -> str:
    return POD_COLORS.get(pod_id or "", NEUTRAL_COLOR)


def get_work_item_label(work_item: WorkItem) -> str:
    return f"{get_pod_prefix(work_item.pod_id)}: {work_item.name}"


def get_work_item_label_by_id(work_items: Sequence[WorkItem], work_item_id: str) -> str:
    wi = next((w for w in work_items if w.id == work_item_id), None)
    return get_work_item_label(wi) if wi else UNKNOWN_LABEL


def get_pod_name(pods: Sequence[Pod], pod_id: str) -> str:
    pod = next((p for p in pods if p.id == pod_id), None)
    return pod.name if pod else pod_id


def is_cross_pod_allocation(person: Person, work_item: WorkItem) -> bool:
    """True when the work item belongs to a pod other than the person's home pod."""
    if not person.home_pod_id:
        return False
    return work_item.pod_id != person.home_pod_id


def get_weekly_pod_breakdown(
    person: Person,
    allocations: Sequence[Allocation],
    work_items: Sequence[WorkItem],
    week: WeekInfo,
) -> list[PodDays]:
    """
    Person's allocated days in ``week`` grouped by the work item's pod.

    Sorted by days descending; ties keep first-seen order. Allocations pointing
    at unknown work items are skipped.
    """
    items = {wi.id: wi for wi in work_items}
    week_days = set(week.weekdays)
    totals: dict[str, float] = {}
    for a in allocations:
        if a.person_id != person.id or a.date not in week_days:
            continue
        wi = items.get(a.work_item_id)
        if wi is None:
            continue
        totals[wi.pod_id] = totals.get(wi.pod_id, 0) + a.days
    ordered = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [
        PodDays(
            pod_id=pod_id,
            days=days,
            is_cross_pod=bool(person.home_pod_id) and pod_id != person.home_pod_id,
        )
        for pod_id, days in ordered
    ]
