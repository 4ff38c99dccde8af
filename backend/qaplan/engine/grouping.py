"""
Roster grouping: QA lead, then one group per pod lead, then everyone left over.

Grouping rules:
1. The QA lead gets their own top-level group.
2. Each pod lead gets a group containing their pod(s); the lead sits in the
   first pod's subgroup only.
3. Testers are placed in the subgroup of their affinity pod (home pod, or the
   pod most of their allocations point at, depending on settings).
4. Testers with no resolvable pod but a lead_id go into a "No Pod" subgroup
   under that lead's group.
5. Everyone not placed by 1-4 lands in "Unassigned (Needs Owner)".

Every input person appears in exactly one subgroup.
"""
import logging
from collections import Counter
from collections.abc import Sequence
from typing import Literal

from qaplan.config import get_settings
from qaplan.engine.dates import is_date_in_range
from qaplan.engine.labels import get_pod_name
from qaplan.engine.risks import classify_coverage
from qaplan.schemas.allocation import Allocation
from qaplan.schemas.person import Person, PersonRole
from qaplan.schemas.pod import Pod
from qaplan.schemas.risk import RiskLevel, WeekInfo
from qaplan.schemas.roster import GroupWeeklySummary, PodGroup, PodSubgroup
from qaplan.schemas.work_item import WorkItem

logger = logging.getLogger(__name__)

QA_LEAD_POD = Pod(id="__qa_lead__", name="QA Lead")
UNASSIGNED_POD = Pod(id="__unassigned__", name="Unassigned")
UNASSIGNED_LABEL = "Unassigned (Needs Owner)"

Affinity = Literal["home_pod", "allocations"]


def is_synthetic_pod_id(pod_id: str) -> bool:
    return pod_id.startswith("__")


def _no_pod(owner: Person) -> Pod:
    return Pod(id=f"__no_pod_{owner.id}__", name="No Pod")


def resolve_home_pod_affinity(testers: Sequence[Person], pods: Sequence[Pod]) -> dict[str, str | None]:
    """Tester -> home pod, or None when unset or not a known pod."""
    known = {p.id for p in pods}
    return {t.id: t.home_pod_id if t.home_pod_id in known else None for t in testers}


def resolve_allocation_affinity(
    testers: Sequence[Person],
    pods: Sequence[Pod],
    allocations: Sequence[Allocation],
    work_items: Sequence[WorkItem],
) -> dict[str, str | None]:
    """
    Tester -> pod referenced by most of their allocations.

    Ties go to the pod seen first in allocation order. Allocations on unknown
    work items or unknown pods do not vote.
    """
    known = {p.id for p in pods}
    item_pod = {wi.id: wi.pod_id for wi in work_items}
    votes: dict[str, Counter] = {t.id: Counter() for t in testers}
    for a in allocations:
        counter = votes.get(a.person_id)
        pod_id = item_pod.get(a.work_item_id)
        if counter is None or pod_id not in known:
            continue
        counter[pod_id] += 1
    resolved: dict[str, str | None] = {}
    for tester_id, counter in votes.items():
        # Counter keeps insertion order, and max() returns the first maximum
        resolved[tester_id] = max(counter.items(), key=lambda kv: kv[1])[0] if counter else None
    return resolved


def build_pod_groups(
    people: Sequence[Person],
    pods: Sequence[Pod],
    allocations: Sequence[Allocation] = (),
    work_items: Sequence[WorkItem] = (),
    lead_pod_map: dict[str, list[str]] | None = None,
    affinity: Affinity | None = None,
) -> list[PodGroup]:
    settings = get_settings()
    if lead_pod_map is None:
        lead_pod_map = settings.lead_pod_map
    affinity = affinity or settings.grouping_affinity

    pod_map = {p.id: p for p in pods}
    qa_lead = next((p for p in people if p.role == PersonRole.QA_LEAD), None)
    leads = [p for p in people if p.role == PersonRole.POD_LEAD]
    testers = [p for p in people if p.role == PersonRole.TESTER]

    if affinity == "allocations":
        tester_pod = resolve_allocation_affinity(testers, pods, allocations, work_items)
    else:
        tester_pod = resolve_home_pod_affinity(testers, pods)

    placed: set[str] = set()

    def take(predicate) -> list[Person]:
        chosen = [t for t in testers if t.id not in placed and predicate(t)]
        placed.update(t.id for t in chosen)
        return chosen

    def take_no_pod(owner: Person) -> list[Person]:
        return take(lambda t: tester_pod.get(t.id) is None and t.lead_id == owner.id)

    groups: list[PodGroup] = []

    if qa_lead:
        placed.add(qa_lead.id)
        subgroups = [PodSubgroup(pod=QA_LEAD_POD, people=[qa_lead])]
        no_pod = take_no_pod(qa_lead)
        if no_pod:
            subgroups.append(PodSubgroup(pod=_no_pod(qa_lead), people=no_pod))
        groups.append(PodGroup(lead=qa_lead, label=f"QA Lead: {qa_lead.name}", pods=subgroups))

    for lead in leads:
        pod_ids = lead_pod_map.get(lead.id) or ([lead.home_pod_id] if lead.home_pod_id else [])
        owned = [pid for pid in pod_ids if pid in pod_map]
        if not owned:
            continue
        placed.add(lead.id)
        pod_names = " + ".join(get_pod_name(pods, pid) for pid in pod_ids)
        subgroups = []
        for i, pod_id in enumerate(owned):
            members = [lead] if i == 0 else []
            members.extend(take(lambda t: tester_pod.get(t.id) == pod_id))
            subgroups.append(PodSubgroup(pod=pod_map[pod_id], people=members))
        no_pod = take_no_pod(lead)
        if no_pod:
            subgroups.append(PodSubgroup(pod=_no_pod(lead), people=no_pod))
        groups.append(PodGroup(lead=lead, label=f"{pod_names} (Lead: {lead.name})", pods=subgroups))

    unassigned = [p for p in people if p.id not in placed]
    if unassigned:
        groups.append(
            PodGroup(
                lead=None,
                label=UNASSIGNED_LABEL,
                pods=[PodSubgroup(pod=UNASSIGNED_POD, people=unassigned)],
            )
        )
    logger.debug("grouped %d people into %d groups (%s affinity)", len(people), len(groups), affinity)
    return groups


def compute_group_weekly_summary(
    group: PodGroup,
    allocations: Sequence[Allocation],
    work_items: Sequence[WorkItem],
    week: WeekInfo,
    red_ratio: float | None = None,
) -> GroupWeeklySummary:
    """Header numbers for one roster group: load, capacity and coverage risk counts for ``week``."""
    if red_ratio is None:
        red_ratio = get_settings().coverage_red_ratio
    week_days = set(week.weekdays)

    members = {p.id: p for sg in group.pods for p in sg.people}
    assigned_days = sum(a.days for a in allocations if a.person_id in members and a.date in week_days)
    total_cap_days = sum(p.weekly_capacity_days for p in members.values() if p.is_active)

    pod_ids = {sg.pod.id for sg in group.pods if not is_synthetic_pod_id(sg.pod.id)}
    red_count = yellow_count = 0
    for wi in work_items:
        if wi.pod_id not in pod_ids:
            continue
        overlap = {d for d in week.weekdays if is_date_in_range(d, wi.start_date, wi.end_date)}
        if not overlap:
            continue
        planned = sum(a.days for a in allocations if a.work_item_id == wi.id and a.date in overlap)
        level = classify_coverage(planned, wi.required_min_days_per_week, red_ratio)
        if level == RiskLevel.RED:
            red_count += 1
        elif level == RiskLevel.YELLOW:
            yellow_count += 1

    return GroupWeeklySummary(
        assigned_days=assigned_days,
        total_cap_days=total_cap_days,
        red_count=red_count,
        yellow_count=yellow_count,
    )
