"""Pod schemas."""
from pydantic import Field

from qaplan.schemas.common import PlanInput, PlanModel


class Pod(PlanModel):
    id: str
    name: str


class PodCreate(PlanInput):
    id: str | None = Field(default=None, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
