"""
Claim service.

A claim reserves one unit of a promotion's inventory as ``pending``; the
scan later moves it to ``used_quantity``. The inventory guard is a single
conditional UPDATE::

    UPDATE promotions
       SET pending = pending + 1
     WHERE id = %s AND is_approved AND used_quantity + pending < quantity

so two consumers racing for the last unit can never both succeed, no
matter what either of them read before.
"""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import Role
from apps.analytics.services import update_user_analytics
from apps.promotions.models import Promotion

from ..models import ClaimedPromotion
from .exceptions import (
    PromotionNotFoundError,
    PromotionNotApprovedError,
    SoldOutError,
    AlreadyClaimedError,
    ClaimNotFoundError,
    InsufficientPermissionsError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def _get_promotion(promotion_id: int) -> Promotion:
    try:
        return Promotion.objects.get(id=promotion_id)
    except Promotion.DoesNotExist:
        raise PromotionNotFoundError(f"Promotion {promotion_id} not found")


def _has_claimed(user, promotion_id: int) -> bool:
    return ClaimedPromotion.objects.filter(user=user, promotion_id=promotion_id).exists()


def _reserve_unit(promotion_id: int) -> bool:
    """Reserve one unit if the promotion is approved and not sold out."""
    updated = Promotion.objects.available().filter(id=promotion_id).update(
        pending=F('pending') + 1,
        updated_at=timezone.now(),
    )
    return updated == 1


@transaction.atomic
def claim_promotion(*, user: User, promotion_id: int) -> ClaimedPromotion:
    """
    Claim one unit of an approved promotion.

    Counter update, claim insert and analytics update commit together or
    not at all.

    Args:
        user: Consumer claiming the promotion
        promotion_id: Promotion to claim

    Returns:
        Created ClaimedPromotion (unscanned)

    Raises:
        InsufficientPermissionsError: If user is not a consumer
        PromotionNotFoundError: If promotion doesn't exist
        PromotionNotApprovedError: If promotion is not approved
        AlreadyClaimedError: If user already claimed this promotion
        SoldOutError: If no units are left
    """
    if user.role != Role.USER:
        raise InsufficientPermissionsError("Only consumers can claim promotions")

    promotion = _get_promotion(promotion_id)

    if not promotion.is_approved:
        raise PromotionNotApprovedError("This promotion is not available yet")

    if _has_claimed(user, promotion_id):
        raise AlreadyClaimedError("You have already claimed this promotion")

    if not _reserve_unit(promotion_id):
        # Re-read to tell a concurrent decline apart from a sell-out
        if not Promotion.objects.filter(id=promotion_id, is_approved=True).exists():
            raise PromotionNotApprovedError("This promotion is not available yet")
        logger.info("Claim on promotion %s by %s rejected: sold out", promotion_id, user.id)
        raise SoldOutError("This promotion is sold out")

    try:
        with transaction.atomic():
            claim = ClaimedPromotion.objects.create(
                promotion_id=promotion_id,
                user=user,
                scanned=False,
            )
    except IntegrityError:
        # Concurrent claim by the same user; the outer rollback restores the counters
        raise AlreadyClaimedError("You have already claimed this promotion")

    promotion.refresh_from_db()
    update_user_analytics(user=user, promotion=promotion)

    logger.info(
        "Promotion %s claimed by %s (%d/%d left)",
        promotion_id, user.id, promotion.remaining_quantity, promotion.quantity
    )
    return claim


def list_user_claims(*, user: User, scanned=None):
    """
    Claims of a consumer, newest first.

    Args:
        user: Consumer
        scanned: None for all, False for pending, True for redeemed
    """
    queryset = (
        ClaimedPromotion.objects
        .filter(user=user)
        .select_related('promotion', 'promotion__seller', 'promotion__industry')
    )
    if scanned is not None:
        queryset = queryset.filter(scanned=scanned)
    return queryset.order_by('-claimed_at')


def get_user_claim(*, user: User, claim_id: UUID) -> ClaimedPromotion:
    """
    Get one of the user's claims.

    Raises:
        ClaimNotFoundError: If it doesn't exist or belongs to another user
    """
    try:
        return (
            ClaimedPromotion.objects
            .select_related('promotion')
            .get(id=claim_id, user=user)
        )
    except ClaimedPromotion.DoesNotExist:
        raise ClaimNotFoundError(f"Claim {claim_id} not found")
