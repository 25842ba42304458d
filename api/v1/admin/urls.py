"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "licenses",
        views.LicenseCollectionView.as_view(),
        name="licenses",
    ),
    path(
        "licenses/stats",
        views.LicenseStatisticsView.as_view(),
        name="license-statistics",
    ),
    path(
        "licenses/<str:license_key>",
        views.LicenseDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<str:license_key>/deactivate",
        views.DeactivateLicenseView.as_view(),
        name="deactivate-license",
    ),
    path(
        "licenses/<str:license_key>/devices/<str:machine_id>",
        views.DeactivateDeviceView.as_view(),
        name="deactivate-device",
    ),
    path(
        "updates",
        views.ReleaseCollectionView.as_view(),
        name="releases",
    ),
    path(
        "updates/stats",
        views.UpdateStatisticsView.as_view(),
        name="update-statistics",
    ),
    path(
        "updates/<str:version>/deactivate",
        views.DeactivateReleaseView.as_view(),
        name="deactivate-release",
    ),
]
