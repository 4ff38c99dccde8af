"""Person model."""
from datetime import date

from sqlalchemy import JSON, Date, Enum, Float, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from qaplan.database import Base
from qaplan.schemas.person import PersonRole, PersonStatus, PersonType


class Person(Base):
    """QA lead, pod lead or tester. Shared by all scenarios."""

    __tablename__ = "people"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[PersonRole] = mapped_column(Enum(PersonRole), nullable=False, index=True)
    type: Mapped[PersonType] = mapped_column(Enum(PersonType), nullable=False, index=True)
    # No foreign keys: pods and leads may be deleted or imported out of order
    home_pod_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    lead_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    weekly_capacity_days: Mapped[float] = mapped_column(Float, nullable=False, default=5)
    status: Mapped[PersonStatus] = mapped_column(
        Enum(PersonStatus),
        nullable=False,
        default=PersonStatus.ACTIVE,
        index=True,
    )
    archived_at: Mapped[date | None] = mapped_column(Date, nullable=True)
    default_pod_filter_ids: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=True,
    )
