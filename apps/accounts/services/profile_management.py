"""Profile read/update service for consumers, sellers and admins."""

import logging
from typing import Any, Dict

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import Role
from apps.common.storage import blob_storage

from .exceptions import InsufficientPermissionsError, UserNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)

EDITABLE_PROFILE_FIELDS = {
    Role.USER: ['name', 'contact_number'],
    Role.SELLER: ['contact_number', 'latitude', 'longitude', 'business_name'],
    Role.ADMIN: ['name', 'contact_number'],
}


@transaction.atomic
def update_profile(*, user_id, data: Dict[str, Any]) -> User:
    """
    Update the profile fields editable for the user's role.

    Fields outside the role's editable set are ignored.

    Args:
        user_id: User's ID
        data: Field values to update

    Returns:
        Updated User instance

    Raises:
        UserNotFoundError: If the user does not exist
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_id} not found")

    allowed = EDITABLE_PROFILE_FIELDS.get(user.role, [])
    updated = []
    for field in allowed:
        if field in data:
            setattr(user, field, data[field])
            updated.append(field)

    if updated:
        user.save(update_fields=updated)
        logger.info("Profile of %s updated: %s", user.id, ", ".join(updated))

    return user


def upload_business_logo(*, user: User, uploaded_file) -> User:
    """
    Upload a seller's logo to blob storage and store its public URL.

    Raises:
        InsufficientPermissionsError: If the user is not a seller
        InvalidImageError, StorageError: From blob storage
    """
    if user.role != Role.SELLER:
        raise InsufficientPermissionsError("Only sellers can upload a business logo")

    url = blob_storage.upload_image(settings.LOGO_BUCKET, user.id, uploaded_file)

    User.objects.filter(id=user.id).update(business_logo=url)
    user.business_logo = url
    return user
