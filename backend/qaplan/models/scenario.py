"""Scenario model and the scenario-scoped plan tables."""
import datetime as dt

from sqlalchemy import Boolean, Date, Enum, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qaplan.database import Base
from qaplan.schemas.work_item import WorkItemType


class Scenario(Base):
    """Named, independent copy of work items, allocations and time off."""

    __tablename__ = "scenarios"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_base: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    work_items: Mapped[list["WorkItem"]] = relationship(
        "WorkItem",
        back_populates="scenario",
        cascade="all, delete-orphan",
    )
    allocations: Mapped[list["Allocation"]] = relationship(
        "Allocation",
        back_populates="scenario",
        cascade="all, delete-orphan",
    )
    time_offs: Mapped[list["TimeOff"]] = relationship(
        "TimeOff",
        back_populates="scenario",
        cascade="all, delete-orphan",
    )


class WorkItem(Base):
    __tablename__ = "work_items"
    __table_args__ = (Index("ix_work_items_scenario_pod", "scenario_id", "pod_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    scenario_id: Mapped[str] = mapped_column(
        ForeignKey("scenarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[WorkItemType] = mapped_column(Enum(WorkItemType), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    pod_id: Mapped[str] = mapped_column(String(64), nullable=False)
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    required_min_days_per_week: Mapped[float] = mapped_column(Float, nullable=False)
    release_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    scenario: Mapped["Scenario"] = relationship("Scenario", back_populates="work_items")


class Allocation(Base):
    """One person-day (or fraction) on a work item."""

    __tablename__ = "allocations"
    __table_args__ = (
        Index("ix_allocations_scenario_person", "scenario_id", "person_id"),
        Index("ix_allocations_scenario_work_item", "scenario_id", "work_item_id"),
        Index("ix_allocations_scenario_date", "scenario_id", "date"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    scenario_id: Mapped[str] = mapped_column(
        ForeignKey("scenarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    person_id: Mapped[str] = mapped_column(String(64), nullable=False)
    work_item_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    days: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)

    scenario: Mapped["Scenario"] = relationship("Scenario", back_populates="allocations")


class TimeOff(Base):
    __tablename__ = "time_offs"
    __table_args__ = (Index("ix_time_offs_scenario_person", "scenario_id", "person_id"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    scenario_id: Mapped[str] = mapped_column(
        ForeignKey("scenarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    person_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    scenario: Mapped["Scenario"] = relationship("Scenario", back_populates="time_offs")
