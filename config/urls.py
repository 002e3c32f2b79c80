"""URL configuration for the rundeck-action project."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("actions/", include("apps.actions.urls")),
]
