from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class PlatformUserAdmin(UserAdmin):
    list_display = ('username', 'name', 'role', 'nim', 'attendance_number', 'is_staff')
    list_filter = ('role', 'is_staff', 'is_active')
    search_fields = ('username', 'name', 'nim', 'attendance_number')
    fieldsets = UserAdmin.fieldsets + (
        ("Exam Profile", {"fields": ("role", "name", "nim", "attendance_number")}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ("Exam Profile", {"fields": ("role", "name", "nim", "attendance_number")}),
    )
