"""Shared schema bases.

Records are exchanged as camelCase JSON (``homePodId``, ``requiredMinDaysPerWeek``)
so exported plans stay readable by the browser client; Python code uses the
snake_case attribute names.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class PlanModel(BaseModel):
    """Immutable value record."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        frozen = True


class PlanInput(BaseModel):
    """Request body."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
