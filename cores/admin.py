from django.contrib import admin

from .models import PlatformSetting, AuditLog


@admin.register(PlatformSetting)
class PlatformSettingAdmin(admin.ModelAdmin):
    list_display = ('site_name', 'default_exam_duration', 'allow_late_submission', 'enforce_max_score')

    def has_add_permission(self, request):
        return not PlatformSetting.objects.exists()


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'actor', 'action', 'target_model', 'target_object_id')
    list_filter = ('action', 'target_model')
    readonly_fields = [f.name for f in AuditLog._meta.fields]
