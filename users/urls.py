from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import (
    RegisterView,
    CustomLoginView,
    StudentListView,
    LecturerManagementView,
    UserProfileView
)

urlpatterns = [
    # --- Authentication ---
    path('auth/register/', RegisterView.as_view(), name='register'),
    path('auth/login/', CustomLoginView.as_view(), name='login'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    path('profile/', UserProfileView.as_view(), name='user-profile'),

    # --- Admin: accounts ---
    path('admin/students/', StudentListView.as_view(), name='admin-students'),
    path('admin/lecturers/', LecturerManagementView.as_view(), name='admin-lecturers'),
]
