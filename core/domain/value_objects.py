"""
Value objects shared across bounded contexts.

Value objects have no identity and compare by value.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from core.domain.exceptions import (
    InvalidHistoryStatusError,
    InvalidPlanError,
    ValidationFailure,
)


@dataclass(frozen=True)
class Email:
    """Customer email address."""

    value: str

    def __post_init__(self):
        if not self.value or "@" not in self.value:
            raise ValidationFailure(f"Invalid email address: {self.value}", code="INVALID_EMAIL")

    def __str__(self) -> str:
        return self.value


class Plan(Enum):
    """Purchasable plan tiers."""

    INDIVIDUAL = "Individual"
    TWO_DEVICES = "2 Devices"
    FIVE_DEVICES = "5 Devices"
    ENTERPRISE = "Enterprise"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: str) -> "Plan":
        """
        Parse a plan name.

        Raises:
            InvalidPlanError: If the name is not a known tier
        """
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(plan.value for plan in cls)
            raise InvalidPlanError(f"Invalid plan '{value}'. Expected one of: {choices}") from None

    @property
    def default_max_devices(self) -> int:
        """Device quota granted by this plan."""
        return PLAN_DEVICE_QUOTAS[self]


# Every Plan member must appear here; tests assert the table is exhaustive.
PLAN_DEVICE_QUOTAS: Dict[Plan, int] = {
    Plan.INDIVIDUAL: 1,
    Plan.TWO_DEVICES: 2,
    Plan.FIVE_DEVICES: 5,
    Plan.ENTERPRISE: 999,
}


class ValidationErrorType(Enum):
    """Failure kinds reported by license validation."""

    INVALID_KEY = "invalid_key"
    # Part of the client contract; no validation step produces it.
    MACHINE_MISMATCH = "machine_mismatch"
    MAX_DEVICES_REACHED = "max_devices_reached"
    INACTIVE = "inactive"
    EXPIRED = "expired"

    def __str__(self) -> str:
        return self.value


class ReleaseType(Enum):
    """Release channel of a published version."""

    NORMAL = "normal"
    FORCED = "forced"
    BETA = "beta"

    def __str__(self) -> str:
        return self.value


class UpdateStatus(Enum):
    """Progress of a client update attempt."""

    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def closing(cls, value: str) -> "UpdateStatus":
        """
        Parse a status that may close a started history row.

        Raises:
            InvalidHistoryStatusError: If the value is not completed or failed
        """
        if value in (cls.COMPLETED.value, cls.FAILED.value):
            return cls(value)
        raise InvalidHistoryStatusError(
            f"Invalid update status '{value}'. Expected 'completed' or 'failed'"
        )


@dataclass(frozen=True)
class Pagination:
    """Page metadata attached to paginated listings."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def of(cls, page: int, limit: int, total: int) -> "Pagination":
        if page < 1 or limit < 1:
            raise ValidationFailure("Page and limit must be positive", code="INVALID_PAGINATION")
        return cls(page=page, limit=limit, total=total, pages=-(-total // limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
