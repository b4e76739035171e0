"""
Promotion listing service.

What a caller sees depends on its role:
- consumers: approved promotions only
- sellers: their own promotions
- admins: everything, optionally filtered by approval state
"""

from dataclasses import dataclass
from typing import List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Q, QuerySet

from apps.accounts.models import Role

from ..models import Industry, Promotion
from .exceptions import PromotionNotFoundError

User = get_user_model()


@dataclass
class PromotionPage:
    items: List[Promotion]
    page: int
    page_size: int
    total: int

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total


def visible_promotions(viewer: User) -> QuerySet:
    """Base queryset of promotions the viewer may see."""
    queryset = Promotion.objects.select_related('seller', 'industry')

    if viewer.is_marketplace_admin:
        return queryset
    if viewer.is_seller:
        return queryset.filter(seller=viewer)
    return queryset.approved()


def search_promotions(
    *,
    viewer: User,
    search: Optional[str] = None,
    industry_id: Optional[int] = None,
    is_approved: Optional[bool] = None
) -> QuerySet:
    """
    Filter the promotions visible to ``viewer``, newest first.

    Args:
        viewer: Requesting user (scopes the result by role)
        search: Case-insensitive match on title, description or seller business name
        industry_id: Only promotions of this industry
        is_approved: Approval filter (admin listing)

    Returns:
        QuerySet of Promotion
    """
    queryset = visible_promotions(viewer)

    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) |
            Q(description__icontains=search) |
            Q(seller__business_name__icontains=search)
        )

    if industry_id is not None:
        queryset = queryset.filter(industry_id=industry_id)

    if is_approved is not None and viewer.role != Role.USER:
        queryset = queryset.filter(is_approved=is_approved)

    return queryset.order_by('-created_at', '-id')


def list_promotions(
    *,
    viewer: User,
    page: int = 1,
    page_size: Optional[int] = None,
    search: Optional[str] = None,
    industry_id: Optional[int] = None,
    is_approved: Optional[bool] = None
) -> PromotionPage:
    """
    Return one page of promotions with a ``has_more`` flag.

    Pages are 1-based; a page past the end is empty.
    """
    page = max(int(page), 1)
    page_size = page_size or settings.PROMOTIONS_PAGE_SIZE

    queryset = search_promotions(
        viewer=viewer,
        search=search,
        industry_id=industry_id,
        is_approved=is_approved,
    )
    total = queryset.count()
    offset = (page - 1) * page_size
    items = list(queryset[offset:offset + page_size])

    return PromotionPage(items=items, page=page, page_size=page_size, total=total)


def get_promotion(*, promotion_id: int, viewer: User) -> Promotion:
    """
    Get a single promotion visible to ``viewer``.

    Raises:
        PromotionNotFoundError: If it doesn't exist or isn't visible
    """
    try:
        return visible_promotions(viewer).get(id=promotion_id)
    except Promotion.DoesNotExist:
        raise PromotionNotFoundError(f"Promotion {promotion_id} not found")


def list_industries() -> QuerySet:
    """All industries ordered by name."""
    return Industry.objects.order_by('name')
