from rest_framework import serializers
from .models import PlatformSetting, AuditLog

class PlatformSettingSerializer(serializers.ModelSerializer):
    """Exam policy knobs read by the session manager and the answer store."""
    class Meta:
        model = PlatformSetting
        fields = [
            'id', 'site_name', 'support_email', 'default_exam_duration',
            'allow_late_submission', 'enforce_max_score'
        ]
        read_only_fields = ['id']

    def validate_default_exam_duration(self, value):
        # A zero-length session would be expired the moment it starts
        if value < 1:
            raise serializers.ValidationError("Exam duration must be at least one minute")
        return value

class AuditLogSerializer(serializers.ModelSerializer):
    actor_username = serializers.CharField(source='actor.username', read_only=True, default=None)
    actor_role = serializers.CharField(source='actor.role', read_only=True, default=None)
    action_display = serializers.CharField(source='get_action_display', read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id', 'actor', 'actor_username', 'actor_role', 'action', 'action_display',
            'target_model', 'target_object_id', 'ip_address', 'timestamp', 'details'
        ]
