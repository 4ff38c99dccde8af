"""Demo plan: five product pods, their leads, vendor testers and a base scenario."""
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qaplan import models
from qaplan.engine.dates import get_week_start, get_weekdays_in_range
from qaplan.schemas.allocation import Allocation, TimeOff
from qaplan.schemas.person import Person, PersonRole, PersonType
from qaplan.schemas.pod import Pod
from qaplan.schemas.scenario import AppData, Scenario, ScenarioData
from qaplan.schemas.work_item import WorkItem, WorkItemType
from qaplan.services.scenario_service import BASE_SCENARIO_ID, import_data

SEED_PODS = [
    Pod(id="pod-ww", name="Word Wizards"),
    Pod(id="pod-ps", name="Pod Squad"),
    Pod(id="pod-tp", name="TINPOZ"),
    Pod(id="pod-ss", name="ServerScapes"),
    Pod(id="pod-la", name="Lalo"),
    Pod(id="pod-qa", name="QA Pool"),
]

SEED_LEADS = [
    ("person-izzy", "Izzy", "pod-ps", ["pod-ps"]),
    ("person-lionel", "Lionel", "pod-la", ["pod-la"]),
    ("person-kawika", "Kawika", "pod-tp", ["pod-tp", "pod-ss"]),
    ("person-tbh", "TBH", "pod-ww", ["pod-ww"]),
]

# vendor number -> home pod
VENDOR_HOME_PODS = {
    1: "pod-ss", 2: "pod-ss", 3: "pod-ss", 4: "pod-ss",
    5: "pod-ps", 6: "pod-ps", 7: "pod-ps",
    8: "pod-tp", 9: "pod-tp",
    10: "pod-ww", 11: "pod-ww", 12: "pod-ww",
    13: "pod-la", 14: "pod-la",
}
FLOATING_VENDORS = (15, 16)  # no home pod, report to the QA lead
UNOWNED_VENDORS = (17, 18)  # no home pod, no lead

# (id, pod, name, type, start week, end week, required days/week)
SEED_WORK_ITEMS = [
    ("wi-ww-1", "pod-ww", "Spell Check Overhaul", WorkItemType.FEATURE, 0, 6, 3),
    ("wi-ww-2", "pod-ww", "Localization Testing", WorkItemType.INITIATIVE, 1, 8, 2),
    ("wi-ps-1", "pod-ps", "Dashboard Redesign", WorkItemType.FEATURE, 0, 5, 5),
    ("wi-ps-2", "pod-ps", "User Profile v2", WorkItemType.FEATURE, 3, 9, 3),
    ("wi-tp-1", "pod-tp", "Notification Center", WorkItemType.FEATURE, 0, 4, 4),
    ("wi-ss-1", "pod-ss", "Login Migration", WorkItemType.INITIATIVE, 0, 7, 8),
    ("wi-ss-2", "pod-ss", "Load Testing", WorkItemType.INITIATIVE, 2, 6, 3),
    ("wi-la-1", "pod-la", "Payment Flow", WorkItemType.FEATURE, 0, 6, 4),
]


def _vendor_id(n: int) -> str:
    return f"person-vendor-{n:02d}"


def build_seed_people() -> list[Person]:
    people = [
        Person(
            id="person-emily",
            name="Emily",
            role=PersonRole.QA_LEAD,
            type=PersonType.INTERNAL,
            weekly_capacity_days=5,
        )
    ]
    for person_id, name, home_pod, pod_filter in SEED_LEADS:
        people.append(Person(
            id=person_id,
            name=name,
            role=PersonRole.POD_LEAD,
            type=PersonType.INTERNAL,
            home_pod_id=home_pod,
            weekly_capacity_days=5,
            default_pod_filter_ids=pod_filter,
        ))
    for n in range(1, max(UNOWNED_VENDORS) + 1):
        people.append(Person(
            id=_vendor_id(n),
            name=f"Vendor QA {n:02d}",
            role=PersonRole.TESTER,
            type=PersonType.VENDOR,
            home_pod_id=VENDOR_HOME_PODS.get(n),
            lead_id="person-emily" if n in FLOATING_VENDORS else None,
            weekly_capacity_days=5,
        ))
    return people


def build_seed_data(today: date) -> AppData:
    """
    Demo document anchored at the week containing ``today``.

    Each homed vendor works full weeks on the first running work item of their
    pod; floating vendors hop between pods daily, which makes them show up
    under context-switching risk.
    """
    week0 = get_week_start(today)
    work_items = [
        WorkItem(
            id=wi_id,
            type=wi_type,
            name=name,
            pod_id=pod_id,
            start_date=week0 + timedelta(weeks=start),
            end_date=week0 + timedelta(weeks=end, days=4),
            required_min_days_per_week=required,
        )
        for wi_id, pod_id, name, wi_type, start, end, required in SEED_WORK_ITEMS
    ]
    people = build_seed_people()

    allocations: list[Allocation] = []
    horizon = get_weekdays_in_range(week0, week0 + timedelta(weeks=8, days=4))
    for person in people:
        if person.role != PersonRole.TESTER:
            continue
        n = int(person.id.rsplit("-", 1)[1])
        for i, day in enumerate(horizon):
            if person.home_pod_id:
                running = [w for w in work_items if w.pod_id == person.home_pod_id and w.start_date <= day <= w.end_date]
            elif n in FLOATING_VENDORS:
                running = [w for w in work_items if w.start_date <= day <= w.end_date]
                running = running[i % len(running):] if running else []
            else:
                running = []
            if running:
                allocations.append(Allocation(
                    id=f"alloc-{person.id}-{day.isoformat()}",
                    person_id=person.id,
                    work_item_id=running[0].id,
                    date=day,
                ))

    time_offs = [
        TimeOff(id="to-vendor-01", person_id=_vendor_id(1), date=week0 + timedelta(weeks=2, days=4), reason="PTO"),
        TimeOff(id="to-vendor-05", person_id=_vendor_id(5), date=week0 + timedelta(weeks=3), reason="Holiday"),
    ]
    off = {(t.person_id, t.date) for t in time_offs}
    allocations = [a for a in allocations if (a.person_id, a.date) not in off]

    return AppData(
        pods=list(SEED_PODS),
        people=people,
        scenarios=[
            ScenarioData(
                scenario=Scenario(id=BASE_SCENARIO_ID, name="Base Plan", is_base=True),
                work_items=work_items,
                allocations=allocations,
                time_offs=time_offs,
            )
        ],
    )


async def seed_if_empty(db: AsyncSession, today: date | None = None) -> bool:
    """Load the demo plan when no scenario exists yet. Returns True if seeded."""
    count = (await db.execute(select(func.count()).select_from(models.Scenario))).scalar_one()
    if count:
        return False
    await import_data(db, build_seed_data(today or date.today()))
    return True
