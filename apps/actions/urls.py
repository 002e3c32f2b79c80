"""
URL configuration for the actions app.
"""

from django.urls import path

from apps.actions.views import ActionExecuteView, ActionTypesView

app_name = "actions"

urlpatterns = [
    # Fire a stored connector
    path("execute/<str:connector>/", ActionExecuteView.as_view(), name="execute"),
    # Action type info
    path("types/", ActionTypesView.as_view(), name="types"),
    path("types/<str:type_id>/", ActionTypesView.as_view(), name="type_detail"),
]
