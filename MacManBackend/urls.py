"""
URL configuration for MacManBackend project.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from api.v1.license.views import ValidateLicenseView
from api.v2.update.views import CheckForUpdateView
from core.views import HealthCacheView, HealthDBView, HealthView, ReadyView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    path("health/cache/", HealthCacheView.as_view(), name="health-cache"),
    path("ready/", ReadyView.as_view(), name="ready"),
    # API endpoints
    path("api/licenses/", include(("api.v1.license.urls", "license"))),
    path("api/v2/updates/", include(("api.v2.update.urls", "update"))),
    path("api/admin/", include(("api.v1.admin.urls", "admin-api"))),
    # Paths still used by shipped clients
    path("api/validate-key", ValidateLicenseView.as_view(), name="legacy-validate-key"),
    path("api/v2/check-update", CheckForUpdateView.as_view(), name="legacy-check-update"),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    # ReDoc
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
