"""
Write side of analytics: the per-consumer running totals.

``update_user_analytics`` is called inside the claim transaction, so the
totals roll back together with a failed claim.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .models import UserAnalytics

logger = logging.getLogger(__name__)


@transaction.atomic
def update_user_analytics(*, user, promotion) -> UserAnalytics:
    """
    Add one claimed promotion to the consumer's totals.

    Args:
        user: Consumer who claimed
        promotion: Claimed promotion

    Returns:
        Refreshed UserAnalytics row

    Note:
        ``money_saved`` only grows when the original price is known and
        higher than the promotional price.
    """
    spent = promotion.promotional_price
    saved = Decimal('0.00')
    if promotion.original_price is not None and promotion.original_price > spent:
        saved = promotion.original_price - spent

    UserAnalytics.objects.get_or_create(user=user)
    UserAnalytics.objects.filter(user=user).update(
        items_bought=F('items_bought') + 1,
        money_spent=F('money_spent') + spent,
        money_saved=F('money_saved') + saved,
        updated_at=timezone.now(),
    )

    logger.debug("Analytics of %s: +1 item, spent %s, saved %s", user.id, spent, saved)
    return UserAnalytics.objects.get(user=user)
