"""
Integration tests for the custom middleware stack and health endpoints.
"""
import pytest
from django.core.cache import cache
from django.test import override_settings
from django.urls import reverse


@pytest.fixture
def clean_cache():
    cache.clear()
    yield
    cache.clear()


def validate(api_client, license_key):
    return api_client.post(
        reverse("license:validate-license"),
        {"license_key": license_key, "machine_id": "machine-1"},
        format="json",
    )


@pytest.mark.django_db
@pytest.mark.integration
@pytest.mark.usefixtures("clean_cache")
class TestRateLimitMiddleware:
    """Fixed-window limits per client IP."""

    @override_settings(
        RATE_LIMIT_ENABLED=True,
        LICENSE_VALIDATION_RATE_LIMIT_MAX_REQUESTS=2,
        LICENSE_VALIDATION_RATE_LIMIT_WINDOW_SECONDS=300,
    )
    def test_validation_tier(self, api_client, db_license):
        first = validate(api_client, db_license.license_key)
        second = validate(api_client, db_license.license_key)
        third = validate(api_client, db_license.license_key)

        assert first.status_code == 200
        assert first["X-RateLimit-Limit"] == "2"
        assert first["X-RateLimit-Remaining"] == "1"
        assert second["X-RateLimit-Remaining"] == "0"
        assert third.status_code == 429
        assert third.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert "Retry-After" in third

    @override_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=1)
    def test_general_tier(self, api_client, db_release):
        params = {"version": "1.0.10", "userId": "u"}

        assert api_client.get(reverse("update:check-for-update"), params).status_code == 200
        assert api_client.get(reverse("update:check-for-update"), params).status_code == 429

    @override_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=1)
    def test_clients_are_counted_separately(self, api_client, db_release):
        params = {"version": "1.0.10", "userId": "u"}
        url = reverse("update:check-for-update")

        assert api_client.get(url, params, REMOTE_ADDR="10.0.0.1").status_code == 200
        assert api_client.get(url, params, REMOTE_ADDR="10.0.0.2").status_code == 200

    @override_settings(
        RATE_LIMIT_ENABLED=True,
        LICENSE_VALIDATION_RATE_LIMIT_MAX_REQUESTS=2,
        LICENSE_VALIDATION_RATE_LIMIT_WINDOW_SECONDS=300,
    )
    def test_forwarded_header_is_ignored_without_trusted_proxy(self, api_client, db_license):
        codes = [
            api_client.post(
                reverse("license:validate-license"),
                {"license_key": db_license.license_key, "machine_id": "machine-1"},
                format="json",
                HTTP_X_FORWARDED_FOR=f"10.0.0.{i}",
            ).status_code
            for i in range(5)
        ]

        assert codes == [200, 200, 429, 429, 429]

    @override_settings(
        RATE_LIMIT_ENABLED=True,
        RATE_LIMIT_MAX_REQUESTS=1,
        RATE_LIMIT_TRUSTED_PROXY_COUNT=1,
    )
    def test_trusted_proxy_entry_identifies_client(self, api_client, db_release):
        url = reverse("update:check-for-update")
        params = {"version": "1.0.10", "userId": "u"}

        first = api_client.get(url, params, HTTP_X_FORWARDED_FOR="1.1.1.1, 203.0.113.7")
        spoofed = api_client.get(url, params, HTTP_X_FORWARDED_FOR="9.9.9.9, 203.0.113.7")
        other = api_client.get(url, params, HTTP_X_FORWARDED_FOR="1.1.1.1, 203.0.113.8")

        assert first.status_code == 200
        assert spoofed.status_code == 429
        assert other.status_code == 200

    @override_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=1)
    def test_health_is_not_limited(self, client):
        for _ in range(3):
            assert client.get(reverse("health")).status_code == 200

    def test_disabled_in_tests(self, api_client, db_license):
        response = validate(api_client, db_license.license_key)

        assert "X-RateLimit-Limit" not in response


@pytest.mark.django_db
@pytest.mark.integration
class TestObservabilityMiddleware:
    """Correlation ids and request status headers."""

    def test_generates_correlation_id(self, client):
        response = client.get(reverse("health"))

        assert response["X-Correlation-ID"]
        assert response["X-Request-Status"] == "success"
        assert "X-Request-Duration" in response

    def test_propagates_correlation_id(self, client):
        response = client.get(reverse("health"), HTTP_X_CORRELATION_ID="corr-123")

        assert response["X-Correlation-ID"] == "corr-123"

    def test_client_error_status(self, api_client):
        response = api_client.get(reverse("admin-api:licenses"))

        assert response["X-Request-Status"] == "client_error"


@pytest.mark.django_db
@pytest.mark.integration
class TestHealthViews:
    """Liveness and readiness endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "macman-backend"}

    def test_database_health(self, client):
        response = client.get(reverse("health-db"))

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_cache_health(self, client):
        response = client.get(reverse("health-cache"))

        assert response.status_code == 200

    def test_ready(self, client):
        response = client.get(reverse("ready"))

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"database": True, "cache": True}}
