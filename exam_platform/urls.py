from django.contrib import admin
from django.urls import path, include

from assessments.views import AdminStatsView

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- Authentication, Profile & Accounts ---
    path('api/', include('users.urls')),

    # --- Admin Dashboard ---
    path('api/admin/stats/', AdminStatsView.as_view(), name='admin-stats'),
    path('api/admin/', include('cores.urls')),

    # --- Question Bank ---
    path('api/', include('exams.urls')),

    # --- Exam Sessions & Grading ---
    path('api/', include('assessments.urls')),
]
