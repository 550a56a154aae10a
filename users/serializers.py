from rest_framework import serializers
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

# Attempt counts and last activity in StudentListSerializer
from assessments.models import ExamSession

from . import identity

User = get_user_model()

class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'name', 'nim', 'attendance_number', 'role', 'is_staff']
        read_only_fields = ['username', 'role', 'is_staff', 'nim', 'attendance_number']

class RegisterSerializer(serializers.Serializer):
    """Student self-registration. Uniqueness is checked by the identity provider."""
    name = serializers.CharField(max_length=150)
    nim = serializers.CharField(max_length=30)
    attendance_number = serializers.CharField(max_length=30)
    username = serializers.CharField(min_length=3, max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(write_only=True, min_length=6)
    password_confirmation = serializers.CharField(write_only=True, min_length=6)

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirmation']:
            raise serializers.ValidationError({"password_confirmation": "Passwords don't match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirmation')
        return identity.register(validated_data)

    def to_representation(self, instance):
        return UserSerializer(instance).data

class LecturerSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'name', 'password', 'role']
        read_only_fields = ['role']

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data['username'],
            email=validated_data.get('email', ''),
            password=validated_data['password'],
            name=validated_data.get('name', ''),
            role=User.Role.LECTURER,
        )

class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserSerializer(self.user).data
        return data

class StudentListSerializer(serializers.ModelSerializer):
    exams_taken = serializers.SerializerMethodField()
    last_activity = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'name', 'nim', 'attendance_number', 'exams_taken', 'last_activity']

    def get_exams_taken(self, obj):
        return ExamSession.objects.filter(student=obj).count()

    def get_last_activity(self, obj):
        last_session = ExamSession.objects.filter(student=obj).order_by('-started_at').first()
        if last_session:
            return last_session.started_at
        return obj.date_joined
