from rest_framework import permissions


class HasRole(permissions.BasePermission):
    """
    Allows access to authenticated users holding ``role``.
    Subclasses pick the role; staff accounts are not exempt.
    """
    role = None

    def has_permission(self, request, view):
        # 1. User must be logged in
        if not request.user or not request.user.is_authenticated:
            return False

        # 2. Check Role
        return getattr(request.user, 'role', '') == self.role


class IsLecturer(HasRole):
    role = 'lecturer'


class IsStudent(HasRole):
    role = 'student'
