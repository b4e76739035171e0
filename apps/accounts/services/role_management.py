"""
Admin user management: listing users by role and changing roles.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import Role

from .exceptions import (
    InsufficientPermissionsError,
    InvalidRoleError,
    UserNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def list_users(
    *,
    requested_by: User,
    role: Optional[str] = None,
    search: str = '',
    ascending: bool = False
) -> QuerySet:
    """
    List users for the admin console.

    Args:
        requested_by: Must be an admin
        role: Optional role filter
        search: Case-insensitive match on email or name
        ascending: Order by created_at ascending instead of newest first

    Raises:
        InsufficientPermissionsError: If requested_by is not an admin
        InvalidRoleError: If role is not a known role
    """
    if requested_by.role != Role.ADMIN:
        raise InsufficientPermissionsError("Only admins can list users")

    queryset = User.objects.all()
    if role:
        if role not in Role.values:
            raise InvalidRoleError(f"Invalid role. Must be one of: {Role.values}")
        queryset = queryset.filter(role=role)
    if search:
        queryset = queryset.filter(Q(email__icontains=search) | Q(name__icontains=search))

    return queryset.order_by('created_at' if ascending else '-created_at')


@transaction.atomic
def update_user_role(*, user_id: UUID, new_role: str, updated_by: User) -> User:
    """
    Change a user's role (admin only).

    Raises:
        InvalidRoleError: If new_role is not user, seller or admin
        InsufficientPermissionsError: If updated_by is not an admin
        UserNotFoundError: If the target user does not exist
    """
    if new_role not in Role.values:
        raise InvalidRoleError(f"Invalid role. Must be one of: {Role.values}")

    if updated_by.role != Role.ADMIN:
        raise InsufficientPermissionsError("Only admins can change user roles")

    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_id} not found")

    previous = user.role
    user.role = new_role
    user.save(update_fields=['role'])

    logger.info("Role of %s changed from %s to %s by %s", user.id, previous, new_role, updated_by.id)
    return user
