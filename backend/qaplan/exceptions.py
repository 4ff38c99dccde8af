"""Service-level errors. The app's exception handlers map them to 404 and 400 responses."""


class NotFoundError(LookupError):
    """Referenced scenario, person, work item or time-off entry does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class PlanValidationError(ValueError):
    """Rejected write, e.g. a work item ending before it starts."""
