"""
Pytest configuration and shared fixtures.

Unit tests run handlers against the in-memory repositories defined here;
integration tests use the Django repositories on the test database.
"""

import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pytest
from asgiref.sync import async_to_sync

from activations.domain.activation import Activation
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from activations.ports.activation_repository import ActivationRepository
from core.domain.events import EventHandler, utc_now
from core.domain.exceptions import (
    DuplicateActivationError,
    DuplicateLicenseKeyError,
    LicenseNotFoundError,
    ReleaseAlreadyExistsError,
)
from core.domain.value_objects import Plan, ReleaseType, UpdateStatus
from core.infrastructure.event_handlers import ALL_EVENTS, register_event_handlers
from core.infrastructure.events import event_bus
from licenses.domain.license import License
from licenses.domain.payment import Payment
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_payment_repository import DjangoPaymentRepository
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.payment_repository import PaymentRepository
from updates.domain.release import Release
from updates.domain.update_history import UpdateHistory
from updates.infrastructure.repositories.django_release_repository import (
    DjangoReleaseRepository,
)
from updates.infrastructure.repositories.django_update_history_repository import (
    DjangoUpdateHistoryRepository,
)
from updates.ports.release_repository import ReleaseRepository
from updates.ports.update_history_repository import UpdateHistoryRepository

ADMIN_SECRET = "test-admin-secret"
CHECKSUM = "a" * 64


class InMemoryLicenseRepository(LicenseRepository):
    """LicenseRepository keeping licenses in a dict keyed by id."""

    def __init__(self):
        self.licenses: Dict[uuid.UUID, License] = {}

    async def create(self, license: License) -> License:
        if any(existing.license_key == license.license_key for existing in self.licenses.values()):
            raise DuplicateLicenseKeyError()
        self.licenses[license.id] = license
        return license

    async def save(self, license: License) -> License:
        stored = self.licenses.get(license.id)
        if stored is None:
            raise LicenseNotFoundError()
        self.licenses[license.id] = replace(
            stored,
            email=license.email,
            plan=license.plan,
            max_devices=license.max_devices,
            is_active=license.is_active,
            expires_at=license.expires_at,
            updated_at=utc_now(),
        )
        return self.licenses[license.id]

    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        return self.licenses.get(license_id)

    async def find_by_key(self, license_key: str) -> Optional[License]:
        for license in self.licenses.values():
            if license.license_key == license_key:
                return license
        return None

    async def list(self, offset: int, limit: int) -> List[License]:
        ordered = sorted(self.licenses.values(), key=lambda lic: lic.created_at, reverse=True)
        return ordered[offset : offset + limit]

    async def count(self) -> int:
        return len(self.licenses)

    async def statistics(self) -> Dict:
        by_plan: Dict[str, int] = {}
        for license in self.licenses.values():
            by_plan[license.plan.value] = by_plan.get(license.plan.value, 0) + 1
        return {
            "total_licenses": len(self.licenses),
            "active_licenses": sum(1 for lic in self.licenses.values() if lic.is_active),
            "licenses_by_plan": by_plan,
        }


class InMemoryActivationRepository(ActivationRepository):
    """
    ActivationRepository sharing state with an InMemoryLicenseRepository.

    Claim and release hold a lock around check-and-update so concurrent
    coroutines see the same guarantees as the conditional SQL updates.
    """

    def __init__(self, license_repository: InMemoryLicenseRepository):
        self.license_repository = license_repository
        self.activations: Dict[uuid.UUID, Activation] = {}
        self._lock = asyncio.Lock()

    async def find_active(self, license_id: uuid.UUID, machine_id: str) -> Optional[Activation]:
        for activation in self.activations.values():
            if (
                activation.license_id == license_id
                and activation.machine_id == machine_id
                and activation.is_active
            ):
                return activation
        return None

    async def find_active_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        active = [
            a for a in self.activations.values() if a.license_id == license_id and a.is_active
        ]
        return sorted(active, key=lambda a: a.activated_at, reverse=True)

    async def touch(self, activation: Activation) -> Activation:
        self.activations[activation.id] = activation
        return activation

    async def claim_slot(self, activation: Activation) -> Optional[Activation]:
        async with self._lock:
            # Yield so concurrent claims interleave up to this point.
            await asyncio.sleep(0)
            licenses = self.license_repository.licenses
            license = licenses[activation.license_id]
            if license.device_count >= license.max_devices:
                return None
            if await self.find_active(activation.license_id, activation.machine_id):
                raise DuplicateActivationError()
            licenses[license.id] = replace(
                license,
                device_count=license.device_count + 1,
                activated_at=activation.activated_at,
            )
            self.activations[activation.id] = activation
            return activation

    async def release_slot(self, activation: Activation) -> bool:
        async with self._lock:
            stored = self.activations.get(activation.id)
            if stored is None or not stored.is_active:
                return False
            self.activations[activation.id] = stored.deactivate()
            licenses = self.license_repository.licenses
            license = licenses[activation.license_id]
            licenses[license.id] = replace(license, device_count=max(0, license.device_count - 1))
            return True

    async def count_active(self) -> int:
        return sum(1 for a in self.activations.values() if a.is_active)


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self):
        self.payments: List[Payment] = []

    async def find_by_license(self, license_id: uuid.UUID) -> List[Payment]:
        found = [p for p in self.payments if p.license_id == license_id]
        return sorted(found, key=lambda p: p.created_at, reverse=True)


class InMemoryReleaseRepository(ReleaseRepository):
    """ReleaseRepository keeping releases in a dict keyed by version."""

    def __init__(self):
        self.releases: Dict[str, Release] = {}

    async def create(self, release: Release) -> Release:
        if release.version in self.releases:
            raise ReleaseAlreadyExistsError()
        self.releases[release.version] = release
        return release

    async def save(self, release: Release) -> Release:
        self.releases[release.version] = release
        return release

    async def find_by_version(self, version: str) -> Optional[Release]:
        return self.releases.get(version)

    async def find_latest_active_above(self, build_number: int) -> Optional[Release]:
        candidates = [
            r for r in self.releases.values() if r.is_active and r.build_number > build_number
        ]
        return max(candidates, key=lambda r: r.build_number, default=None)

    async def find_latest(self) -> Optional[Release]:
        return max(self.releases.values(), key=lambda r: r.build_number, default=None)

    async def increment_download_count(self, version: str) -> Optional[Release]:
        release = self.releases.get(version)
        if release is None:
            return None
        self.releases[version] = replace(release, download_count=release.download_count + 1)
        return self.releases[version]

    async def list(self, offset: int, limit: int) -> List[Release]:
        ordered = sorted(self.releases.values(), key=lambda r: r.build_number, reverse=True)
        return ordered[offset : offset + limit]

    async def count(self) -> int:
        return len(self.releases)

    async def statistics(self) -> Dict:
        return {
            "total_updates": len(self.releases),
            "active_updates": sum(1 for r in self.releases.values() if r.is_active),
            "total_downloads": sum(r.download_count for r in self.releases.values()),
        }


class InMemoryUpdateHistoryRepository(UpdateHistoryRepository):
    def __init__(self):
        self.rows: Dict[uuid.UUID, UpdateHistory] = {}

    async def create(self, history: UpdateHistory) -> UpdateHistory:
        self.rows[history.id] = history
        return history

    async def find_latest_started(self, user_id: str, to_version: str) -> Optional[UpdateHistory]:
        started = [
            h
            for h in self.rows.values()
            if h.user_id == user_id
            and h.to_version == to_version
            and h.status is UpdateStatus.STARTED
        ]
        return max(started, key=lambda h: h.created_at, default=None)

    async def save(self, history: UpdateHistory) -> UpdateHistory:
        self.rows[history.id] = history
        return history

    async def count_since(self, since: datetime) -> int:
        return sum(1 for h in self.rows.values() if h.created_at >= since)


class RecordingHandler(EventHandler):
    """Collects published events."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]


def make_license(key: str = "MACMAN-AAAAA-BBBBB-CCCCC", plan: Plan = Plan.TWO_DEVICES, **kwargs):
    """Build a License entity with sensible defaults."""
    return License.create(license_key=key, plan=plan, **kwargs)


def make_release(version: str, build_number: int, **kwargs):
    """Build a Release entity with sensible defaults."""
    defaults = {
        "release_type": ReleaseType.NORMAL,
        "filename": f"MacMan-{version}.dmg",
        "file_size": 1024,
        "checksum": CHECKSUM,
    }
    defaults.update(kwargs)
    return Release.create(version=version, build_number=build_number, **defaults)


# In-memory fixtures


@pytest.fixture
def memory_license_repository():
    return InMemoryLicenseRepository()


@pytest.fixture
def memory_activation_repository(memory_license_repository):
    return InMemoryActivationRepository(memory_license_repository)


@pytest.fixture
def memory_payment_repository():
    return InMemoryPaymentRepository()


@pytest.fixture
def memory_release_repository():
    return InMemoryReleaseRepository()


@pytest.fixture
def memory_history_repository():
    return InMemoryUpdateHistoryRepository()


@pytest.fixture
def recorded_events():
    """Subscribe a recording handler to every domain event for one test."""
    handler = RecordingHandler()
    for event_type in ALL_EVENTS:
        event_bus.subscribe(event_type, handler)
    yield handler
    event_bus.clear()
    register_event_handlers()


# Django fixtures


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def payment_repository():
    return DjangoPaymentRepository()


@pytest.fixture
def release_repository():
    return DjangoReleaseRepository()


@pytest.fixture
def history_repository():
    return DjangoUpdateHistoryRepository()


@pytest.fixture
def db_license(db, license_repository):
    """Fixture for a two-device License saved in database."""
    return async_to_sync(license_repository.create)(
        make_license(email="customer@example.com", expires_at=utc_now() + timedelta(days=365))
    )


@pytest.fixture
def db_release(db, release_repository):
    """Fixture for release 1.0.10 saved in database."""
    return async_to_sync(release_repository.create)(make_release("1.0.10", 10010))


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client):
    """API client carrying the admin secret."""
    api_client.credentials(HTTP_X_ADMIN_SECRET=ADMIN_SECRET)
    return api_client


@pytest.fixture
def license_factory():
    """Factory building License entities."""
    return make_license


@pytest.fixture
def release_factory():
    """Factory building Release entities."""
    return make_release
