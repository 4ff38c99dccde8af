"""Pod model."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from qaplan.database import Base


class Pod(Base):
    """Team that owns work items. Shared by all scenarios."""

    __tablename__ = "pods"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
