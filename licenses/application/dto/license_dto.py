"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from activations.domain.activation import Activation
from core.domain.value_objects import Pagination
from licenses.domain.license import License
from licenses.domain.payment import Payment


@dataclass
class DeviceDTO:
    """DTO for an active device bound to a license."""

    id: uuid.UUID
    machine_id: str
    device_name: Optional[str]
    os_version: Optional[str]
    app_version: Optional[str]
    is_active: bool
    activated_at: datetime
    last_seen_at: datetime

    @classmethod
    def from_entity(cls, activation: Activation) -> "DeviceDTO":
        return cls(
            id=activation.id,
            machine_id=activation.machine_id,
            device_name=activation.device_name,
            os_version=activation.os_version,
            app_version=activation.app_version,
            is_active=activation.is_active,
            activated_at=activation.activated_at,
            last_seen_at=activation.last_seen_at,
        )


@dataclass
class PaymentDTO:
    """DTO for a payment recorded against a license."""

    id: uuid.UUID
    amount: Decimal
    currency: str
    provider: str
    transaction_id: str
    plan: str
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            id=payment.id,
            amount=payment.amount,
            currency=payment.currency,
            provider=payment.provider,
            transaction_id=payment.transaction_id,
            plan=payment.plan,
            status=payment.status,
            created_at=payment.created_at,
        )


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_key: str
    email: Optional[str]
    plan: str
    max_devices: int
    device_count: int
    is_active: bool
    expires_at: Optional[datetime]
    created_at: datetime
    activated_at: Optional[datetime]
    updated_at: datetime
    devices: List[DeviceDTO] = field(default_factory=list)
    payments: List[PaymentDTO] = field(default_factory=list)

    @classmethod
    def from_entity(
        cls,
        license: License,
        devices: Optional[List[Activation]] = None,
        payments: Optional[List[Payment]] = None,
    ) -> "LicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            email=license.email,
            plan=license.plan.value,
            max_devices=license.max_devices,
            device_count=license.device_count,
            is_active=license.is_active,
            expires_at=license.expires_at,
            created_at=license.created_at,
            activated_at=license.activated_at,
            updated_at=license.updated_at,
            devices=[DeviceDTO.from_entity(a) for a in devices or []],
            payments=[PaymentDTO.from_entity(p) for p in payments or []],
        )


@dataclass
class LicenseListDTO:
    """DTO for a page of licenses."""

    licenses: List[LicenseDTO]
    pagination: Pagination


@dataclass
class LicenseStatisticsDTO:
    """DTO for aggregate license counts."""

    total_licenses: int
    active_licenses: int
    total_activations: int
    licenses_by_plan: Dict[str, int]
