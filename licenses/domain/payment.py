"""
Payment read model.

Payments are recorded by the billing integration; this service only
reads them for the license detail view.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Payment:
    """A payment recorded against a license."""

    id: uuid.UUID
    license_id: uuid.UUID
    email: Optional[str]
    amount: Decimal
    currency: str
    provider: str
    transaction_id: str
    plan: str
    status: str
    created_at: datetime
