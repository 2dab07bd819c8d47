"""Error types raised by the credit tracker services."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence


class CreditTrackerError(RuntimeError):
    """Base class for every failure surfaced by the core services."""


class ValidationError(CreditTrackerError):
    """Input rejected by the validation layer; carries messages per field."""

    def __init__(self, errors: Mapping[str, Sequence[str]]):
        self.errors: dict[str, list[str]] = {
            field: list(messages) for field, messages in errors.items()
        }
        summary = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in self.errors.items()
        )
        super().__init__(f"Invalid input ({summary})")


class NotFoundError(CreditTrackerError):
    """Referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str, *, field: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        self.field = field
        super().__init__(f"{entity.capitalize()} {entity_id} not found")


class ConstraintViolation(CreditTrackerError):
    """A referential or uniqueness rule blocks the requested mutation."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class ConcurrencyError(CreditTrackerError):
    """Retry budget exhausted while resolving a race with another writer."""


class StoreError(CreditTrackerError):
    """The underlying store call failed."""
