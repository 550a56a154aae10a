from django.urls import path
from .views import PlatformSettingView, AuditLogListView

# Mounted under /api/admin/
urlpatterns = [
    path('settings/', PlatformSettingView.as_view(), name='exam-policy-settings'),
    path('audit-logs/', AuditLogListView.as_view(), name='audit-log-list'),
]
