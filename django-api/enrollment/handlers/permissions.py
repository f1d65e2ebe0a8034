from rest_framework.permissions import BasePermission

from enrollment import dependencies


class IsEnrollmentAdmin(BasePermission):
    """Grants access when the identity collaborator says the caller is an admin."""

    message = "Administrator access required"

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return dependencies.get_identity_directory().is_admin(str(user.pk))


def caller_is_admin(request) -> bool:
    return IsEnrollmentAdmin().has_permission(request, None)
