import logging

from rest_framework import generics
from rest_framework.permissions import IsAdminUser
from .models import PlatformSetting, AuditLog
from .serializers import PlatformSettingSerializer, AuditLogSerializer

logger = logging.getLogger(__name__)


class PlatformSettingView(generics.RetrieveUpdateAPIView):
    """
    GET/PUT/PATCH the exam policy singleton.
    PUT is treated as a partial update so clients can flip one flag at a time.
    """
    serializer_class = PlatformSettingSerializer
    permission_classes = [IsAdminUser]

    def get_object(self):
        return PlatformSetting.load()

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)

    def perform_update(self, serializer):
        platform_settings = serializer.save()
        changed = ', '.join(sorted(serializer.validated_data))
        logger.info(f"{self.request.user.username} updated exam policy: {changed}")
        AuditLog.record(self.request, 'SETTINGS', platform_settings, details=f"Updated exam policy: {changed}")


class AuditLogListView(generics.ListAPIView):
    """Newest first; filter with ``?action=``, ``?target_model=`` and ``?actor=``."""
    queryset = AuditLog.objects.select_related('actor').order_by('-timestamp')
    serializer_class = AuditLogSerializer
    permission_classes = [IsAdminUser]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get('action'):
            queryset = queryset.filter(action=params['action'])
        if params.get('target_model'):
            queryset = queryset.filter(target_model=params['target_model'])
        if params.get('actor'):
            queryset = queryset.filter(actor_id=params['actor'])
        return queryset
