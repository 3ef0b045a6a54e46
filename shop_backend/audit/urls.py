# audit/urls.py

from django.urls import path

from .views import AdminLogListView

app_name = "audit"

urlpatterns = [
    path("admin/logs/", AdminLogListView.as_view(), name="admin-logs"),
]
