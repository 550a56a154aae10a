from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView
from django.contrib.auth import get_user_model

from cores.models import AuditLog

from .serializers import (
    RegisterSerializer,
    CustomTokenObtainPairSerializer,
    LecturerSerializer,
    StudentListSerializer,
    UserSerializer
)

User = get_user_model()

# --- Authentication Views ---
class RegisterView(generics.CreateAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [permissions.AllowAny]

class CustomLoginView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            user = User.objects.get(pk=response.data['user']['id'])
            AuditLog.objects.create(
                actor=user,
                action='LOGIN',
                target_model='User',
                target_object_id=str(user.pk),
                details=f"{user.username} signed in as {user.role}",
                ip_address=request.META.get('REMOTE_ADDR'),
            )
        return response

class UserProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user

# --- Admin: account lists ---
class StudentListView(generics.ListAPIView):
    serializer_class = StudentListSerializer
    permission_classes = [permissions.IsAdminUser]

    def get_queryset(self):
        return User.objects.filter(role=User.Role.STUDENT).order_by('-date_joined')

class LecturerManagementView(generics.ListCreateAPIView):
    permission_classes = [permissions.IsAdminUser]
    serializer_class = LecturerSerializer

    def get_queryset(self):
        return User.objects.filter(role=User.Role.LECTURER).order_by('username')

    def perform_create(self, serializer):
        lecturer = serializer.save()
        AuditLog.record(
            self.request, 'CREATE', lecturer,
            details=f"Created lecturer account: {lecturer.username}"
        )
