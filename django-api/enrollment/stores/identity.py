"""Identity collaborator backed by Django auth and accounts.ChildProfile."""

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError

from accounts.models import ChildProfile
from enrollment.domain.errors import CollaboratorUnavailableError
from enrollment.stores.interfaces import IdentityDirectory

IDENTITY = "Identity service"


class DjangoIdentityDirectory(IdentityDirectory):
    """Staff users are administrators; children come from onboarding profiles."""

    def is_admin(self, user_id: str) -> bool:
        try:
            return get_user_model().objects.filter(pk=user_id, is_staff=True).exists()
        except (ValueError, ValidationError):
            return False
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(IDENTITY) from exc

    def child_ids(self, parent_id: str) -> frozenset[str]:
        try:
            ids = ChildProfile.objects.filter(parent_id=parent_id).values_list("id", flat=True)
            return frozenset(str(child_id) for child_id in ids)
        except (ValueError, ValidationError):
            return frozenset()
        except DatabaseError as exc:
            raise CollaboratorUnavailableError(IDENTITY) from exc
