# backend/dosage_api/errors.py


class NotFoundError(Exception):
    """A referenced patient or anesthetic id does not resolve."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} with ID {entity_id} not found")


class StoreError(Exception):
    """The entity store failed to read or write."""


class DosageRangeError(ValueError):
    """A calculated dose or volume is not a finite number."""
