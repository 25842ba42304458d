"""
Integration tests for the admin API.
"""
import pytest
from asgiref.sync import async_to_sync
from django.urls import reverse

from activations.infrastructure.models import LicenseActivation as LicenseActivationModel
from licenses.infrastructure.models import License as LicenseModel

CHECKSUM = "c" * 64


def activate(api_client, license_key, machine_id):
    return api_client.post(
        reverse("license:validate-license"),
        {"license_key": license_key, "machine_id": machine_id},
        format="json",
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAuthentication:
    """Admin endpoints require the X-Admin-Secret header."""

    def test_missing_secret(self, api_client):
        response = api_client.get(reverse("admin-api:licenses"))

        assert response.status_code == 401
        assert response.json()["error"] == {
            "code": "UNAUTHORIZED",
            "message": "Missing admin secret. Provide X-Admin-Secret header.",
        }

    def test_invalid_secret(self, api_client):
        api_client.credentials(HTTP_X_ADMIN_SECRET="wrong-secret")

        response = api_client.get(reverse("admin-api:licenses"))

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid admin secret"

    def test_public_endpoints_need_no_secret(self, api_client, db_release):
        response = api_client.get(
            reverse("update:check-for-update"), {"version": "1.0.10", "userId": "u"}
        )

        assert response.status_code == 200


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminLicenseAPI:
    """Integration tests for /api/admin/licenses."""

    def test_create_license(self, admin_client):
        response = admin_client.post(
            reverse("admin-api:licenses"),
            {"plan": "5 Devices", "email": "buyer@example.com"},
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["plan"] == "5 Devices"
        assert data["max_devices"] == 5
        assert data["device_count"] == 0
        assert data["is_active"] is True
        assert data["devices"] == []
        assert LicenseModel.objects.filter(license_key=data["license_key"]).exists()

    def test_create_license_with_override(self, admin_client):
        response = admin_client.post(
            reverse("admin-api:licenses"),
            {"plan": "Enterprise", "max_devices": 25},
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["data"]["max_devices"] == 25

    def test_create_license_unknown_plan(self, admin_client):
        response = admin_client.post(
            reverse("admin-api:licenses"), {"plan": "Lifetime"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"

    def test_list_licenses(self, admin_client, license_repository, license_factory):
        keys = ("MACMAN-AAAAA-AAAAA-AAAA1", "MACMAN-AAAAA-AAAAA-AAAA2", "MACMAN-AAAAA-AAAAA-AAAA3")
        for key in keys:
            async_to_sync(license_repository.create)(license_factory(key=key))

        response = admin_client.get(reverse("admin-api:licenses"), {"page": 2, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["licenses"]) == 1
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}

    def test_list_licenses_limit_bounds(self, admin_client):
        response = admin_client.get(reverse("admin-api:licenses"), {"limit": 500})

        assert response.status_code == 400

    def test_license_detail_includes_devices(self, admin_client, api_client, db_license):
        activate(api_client, db_license.license_key, "machine-1")

        response = admin_client.get(
            reverse("admin-api:license-detail", kwargs={"license_key": db_license.license_key})
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["device_count"] == 1
        assert [device["machine_id"] for device in data["devices"]] == ["machine-1"]
        assert data["payments"] == []

    def test_license_detail_not_found(self, admin_client):
        response = admin_client.get(
            reverse("admin-api:license-detail", kwargs={"license_key": "MACMAN-NOPE0-NOPE0-NOPE0"})
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_deactivate_license(self, admin_client, api_client, db_license):
        response = admin_client.post(
            reverse("admin-api:deactivate-license", kwargs={"license_key": db_license.license_key})
        )

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

        validation = activate(api_client, db_license.license_key, "machine-1")
        assert validation.json()["errorType"] == "inactive"

    def test_statistics(self, admin_client, api_client, db_license):
        activate(api_client, db_license.license_key, "machine-1")

        response = admin_client.get(reverse("admin-api:license-statistics"))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_licenses": 1,
            "active_licenses": 1,
            "total_activations": 1,
            "licenses_by_plan": {"2 Devices": 1},
        }


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminDeviceAPI:
    """Integration tests for freeing device slots."""

    def url(self, license_key, machine_id):
        return reverse(
            "admin-api:deactivate-device",
            kwargs={"license_key": license_key, "machine_id": machine_id},
        )

    def test_deactivate_device_frees_slot(self, admin_client, api_client, db_license):
        activate(api_client, db_license.license_key, "machine-1")
        activate(api_client, db_license.license_key, "machine-2")

        response = admin_client.delete(self.url(db_license.license_key, "machine-1"))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "license_key": db_license.license_key,
            "machine_id": "machine-1",
            "device_count": 1,
            "message": "Device deactivated successfully",
        }
        assert activate(api_client, db_license.license_key, "machine-3").status_code == 200
        assert LicenseActivationModel.objects.filter(is_active=True).count() == 2

    def test_deactivate_unknown_device(self, admin_client, db_license):
        response = admin_client.delete(self.url(db_license.license_key, "machine-9"))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ACTIVATION_NOT_FOUND"

    def test_deactivate_twice(self, admin_client, api_client, db_license):
        activate(api_client, db_license.license_key, "machine-1")
        admin_client.delete(self.url(db_license.license_key, "machine-1"))

        response = admin_client.delete(self.url(db_license.license_key, "machine-1"))

        assert response.status_code == 404
        assert LicenseModel.objects.get(id=db_license.id).device_count == 0


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminReleaseAPI:
    """Integration tests for /api/admin/updates."""

    def payload(self, **overrides):
        payload = {
            "version": "1.2.3",
            "filename": "MacMan-1.2.3.dmg",
            "file_size": 2048,
            "checksum": CHECKSUM.upper(),
            "release_notes": "Bug fixes",
        }
        payload.update(overrides)
        return payload

    def test_create_release_derives_build_number(self, admin_client):
        response = admin_client.post(reverse("admin-api:releases"), self.payload(), format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["build_number"] == 10203
        assert data["release_type"] == "normal"
        assert data["checksum"] == CHECKSUM
        assert data["download_count"] == 0
        assert data["is_active"] is True

    def test_create_release_explicit_build_number(self, admin_client):
        response = admin_client.post(
            reverse("admin-api:releases"),
            self.payload(build_number=42, release_type="beta"),
            format="json",
        )

        assert response.status_code == 201
        assert response.json()["data"]["build_number"] == 42
        assert response.json()["data"]["release_type"] == "beta"

    def test_duplicate_release(self, admin_client, db_release):
        response = admin_client.post(
            reverse("admin-api:releases"), self.payload(version="1.0.10"), format="json"
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "RELEASE_ALREADY_EXISTS"

    def test_rejects_path_in_filename(self, admin_client):
        response = admin_client.post(
            reverse("admin-api:releases"),
            self.payload(filename="../secrets.dmg"),
            format="json",
        )

        assert response.status_code == 400
        assert "filename" in response.json()["error"]["details"]

    def test_list_releases(self, admin_client, release_repository, release_factory):
        async_to_sync(release_repository.create)(release_factory("1.0.9", 10009))
        async_to_sync(release_repository.create)(release_factory("1.0.10", 10010))

        response = admin_client.get(reverse("admin-api:releases"))

        assert response.status_code == 200
        body = response.json()
        assert [release["version"] for release in body["updates"]] == ["1.0.10", "1.0.9"]
        assert body["pagination"]["total"] == 2

    def test_deactivate_release_hides_it_from_checks(self, admin_client, api_client, db_release):
        response = admin_client.post(
            reverse("admin-api:deactivate-release", kwargs={"version": "1.0.10"})
        )

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

        check = api_client.get(
            reverse("update:check-for-update"), {"version": "1.0.0", "userId": "u"}
        )
        assert check.json()["updateAvailable"] is False

    def test_deactivate_unknown_release(self, admin_client):
        response = admin_client.post(
            reverse("admin-api:deactivate-release", kwargs={"version": "9.9.9"})
        )

        assert response.status_code == 404

    def test_statistics(self, admin_client, api_client, db_release):
        api_client.get(reverse("update:check-for-update"), {"version": "1.0.0", "userId": "u"})

        response = admin_client.get(reverse("admin-api:update-statistics"))

        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_updates": 1,
            "active_updates": 1,
            "total_downloads": 0,
            "recent_history": 1,
        }
