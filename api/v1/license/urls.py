"""
URL configuration for the public license API.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path(
        "validate",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
]
