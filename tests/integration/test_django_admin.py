"""
Integration tests for the Django admin site.
"""
import pytest
from django.contrib import admin
from django.contrib.auth import get_user_model
from django.urls import reverse

from activations.infrastructure.models import LicenseActivation
from licenses.infrastructure.models import License, Payment
from updates.infrastructure.models import Release, UpdateHistory


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoAdmin:
    """Operators can browse every table from the Django admin."""

    def test_models_registered(self):
        for model in (License, Payment, LicenseActivation, Release, UpdateHistory):
            assert model in admin.site._registry

    def test_activations_are_read_only(self, rf):
        model_admin = admin.site._registry[LicenseActivation]

        assert model_admin.has_add_permission(rf.get("/")) is False
        assert model_admin.has_delete_permission(rf.get("/")) is False

    def test_license_changelist(self, client, db_license):
        user = get_user_model().objects.create_superuser("admin", "admin@example.com", "pw")
        client.force_login(user)

        response = client.get(reverse("admin:licenses_license_changelist"))

        assert response.status_code == 200
        assert db_license.license_key in response.content.decode()
