"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import AreaListView, ForecastView, SubAreaListView

urlpatterns = [
    path("areas", AreaListView.as_view(), name="areas"),
    path("areas/<str:area>/sub-areas", SubAreaListView.as_view(), name="sub-areas"),
    path("forecast", ForecastView.as_view(), name="forecast"),
]
