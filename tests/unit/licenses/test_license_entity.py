"""
Unit tests for License entity and plan quotas.
"""
from datetime import timedelta

import pytest

from core.domain.events import utc_now
from core.domain.exceptions import InvalidPlanError, ValidationFailure
from core.domain.value_objects import PLAN_DEVICE_QUOTAS, Plan
from licenses.domain.license import License


class TestPlanQuotas:
    """Tests for the plan device quota table."""

    def test_every_plan_has_a_quota(self):
        assert set(PLAN_DEVICE_QUOTAS) == set(Plan)

    @pytest.mark.parametrize(
        "plan,quota",
        [
            (Plan.INDIVIDUAL, 1),
            (Plan.TWO_DEVICES, 2),
            (Plan.FIVE_DEVICES, 5),
            (Plan.ENTERPRISE, 999),
        ],
    )
    def test_plan_quota(self, plan, quota):
        assert plan.default_max_devices == quota

    def test_from_value_parses_plan_names(self):
        assert Plan.from_value("2 Devices") is Plan.TWO_DEVICES

    def test_from_value_rejects_unknown_plan(self):
        with pytest.raises(InvalidPlanError) as exc_info:
            Plan.from_value("Family")
        assert exc_info.value.code == "INVALID_PLAN"


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_uses_plan_quota(self):
        license = License.create(license_key="MACMAN-AAAAA-BBBBB-CCCCC", plan=Plan.FIVE_DEVICES)

        assert license.max_devices == 5
        assert license.device_count == 0
        assert license.is_active is True
        assert license.activated_at is None
        assert license.expires_at is None

    def test_create_with_quota_override(self):
        license = License.create(
            license_key="MACMAN-AAAAA-BBBBB-CCCCC", plan=Plan.INDIVIDUAL, max_devices=3
        )
        assert license.max_devices == 3

    def test_quota_must_be_positive(self):
        with pytest.raises(ValidationFailure) as exc_info:
            License.create(
                license_key="MACMAN-AAAAA-BBBBB-CCCCC", plan=Plan.INDIVIDUAL, max_devices=0
            )
        assert exc_info.value.code == "INVALID_MAX_DEVICES"

    def test_license_without_expiration_never_expires(self):
        license = License.create(license_key="MACMAN-AAAAA-BBBBB-CCCCC", plan=Plan.INDIVIDUAL)
        assert not license.is_expired(utc_now() + timedelta(days=3650))

    def test_is_expired(self):
        expires_at = utc_now() + timedelta(days=1)
        license = License.create(
            license_key="MACMAN-AAAAA-BBBBB-CCCCC", plan=Plan.INDIVIDUAL, expires_at=expires_at
        )

        assert not license.is_expired()
        assert license.is_expired(expires_at + timedelta(seconds=1))

    def test_deactivate_returns_inactive_copy(self):
        license = License.create(license_key="MACMAN-AAAAA-BBBBB-CCCCC", plan=Plan.INDIVIDUAL)
        deactivated = license.deactivate()

        assert license.is_active is True
        assert deactivated.is_active is False
        assert deactivated.id == license.id
