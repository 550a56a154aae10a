# exam_platform/users/backends.py
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model
from django.db.models import Q

User = get_user_model()

class UsernameOrNimBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None
        try:
            # Students may sign in with their NIM instead of the username
            user = User.objects.get(Q(username=username) | Q(nim=username))
        except User.DoesNotExist:
            # Run the hasher anyway to keep timing uniform
            User().set_password(password)
            return None
        except User.MultipleObjectsReturned:
            user = User.objects.filter(username=username).order_by('id').first()
            if user is None:
                return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
