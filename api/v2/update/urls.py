"""
URL configuration for the update API.
"""

from django.urls import path

from api.v2.update import views

urlpatterns = [
    path(
        "check",
        views.CheckForUpdateView.as_view(),
        name="check-for-update",
    ),
    path(
        "download/<str:version>",
        views.DownloadArtifactView.as_view(),
        name="download-update",
    ),
    path(
        "history",
        views.RecordHistoryView.as_view(),
        name="record-history",
    ),
]
