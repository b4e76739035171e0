"""Admin approval of promotions."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import Role

from ..models import Promotion
from .exceptions import PromotionNotFoundError, InsufficientPermissionsError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def set_promotion_approval(*, promotion_id: int, approved: bool, admin: User) -> Promotion:
    """
    Approve or decline a promotion.

    Declining an approved promotion hides it from consumers again; claims
    already made stay valid.

    Raises:
        InsufficientPermissionsError: If caller is not an admin
        PromotionNotFoundError: If promotion doesn't exist
    """
    if admin.role != Role.ADMIN:
        raise InsufficientPermissionsError("Only admins can approve promotions")

    try:
        promotion = Promotion.objects.select_for_update().get(id=promotion_id)
    except Promotion.DoesNotExist:
        raise PromotionNotFoundError(f"Promotion {promotion_id} not found")

    promotion.is_approved = approved
    promotion.save(update_fields=['is_approved', 'updated_at'])

    logger.info(
        "Promotion %s %s by admin %s",
        promotion.id, 'approved' if approved else 'declined', admin.id
    )
    return promotion


def approve_promotion(*, promotion_id: int, admin: User) -> Promotion:
    return set_promotion_approval(promotion_id=promotion_id, approved=True, admin=admin)


def decline_promotion(*, promotion_id: int, admin: User) -> Promotion:
    return set_promotion_approval(promotion_id=promotion_id, approved=False, admin=admin)
