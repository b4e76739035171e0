"""
Analytics Module
=================

Read-only queries behind the marketplace dashboards.

Classes:
    AnalyticsQueries: Static methods for the consumer, seller and admin views.

Key Features:
    - Consumer totals (items bought, money saved and spent)
    - Seller inventory and redemption statistics per promotion
    - Admin dashboard: users, sellers, promotion approval state,
      average promotion duration, top categories, user growth

Example:
    Getting the admin dashboard::

        from apps.analytics.analytics import AnalyticsQueries

        stats = AnalyticsQueries.admin_dashboard()
        print(f"{stats['total_users']} users, {stats['pending_promotions']} awaiting approval")

Note:
    This module doesn't modify any data. The consumer totals are written
    by ``apps.analytics.services.update_user_analytics``.
"""

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, F, Q, Sum
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from apps.accounts.models import Role
from apps.claims.models import ClaimedPromotion
from apps.promotions.models import Industry, Promotion

from .exceptions import InvalidWindowError
from .models import UserAnalytics

User = get_user_model()

TOP_CATEGORIES_LIMIT = 3


class AnalyticsQueries:
    """
    Aggregations for analytics endpoints.

    Methods:
        user_summary: Consumer's running totals and claim counts.
        seller_summary: Seller's inventory and redemption statistics.
        admin_dashboard: Marketplace-wide statistics for admins.

    Note:
        All methods return plain dictionaries, making them suitable for
        JSON serialization in API responses.
    """

    @staticmethod
    def user_summary(user_id):
        """
        Summarize a consumer's claims.

        Args:
            user_id (UUID): The consumer's identifier.

        Returns:
            dict: A dictionary containing:
                - items_bought (int): Promotions claimed.
                - money_saved (Decimal): Sum of original minus promotional price.
                - money_spent (Decimal): Sum of promotional prices.
                - pending_claims (int): Claims not yet redeemed.
                - redeemed_claims (int): Claims scanned by a seller.
        """
        totals = UserAnalytics.objects.filter(user_id=user_id).first()

        claims = ClaimedPromotion.objects.filter(user_id=user_id).aggregate(
            pending=Count('id', filter=Q(scanned=False)),
            redeemed=Count('id', filter=Q(scanned=True)),
        )

        return {
            'items_bought': totals.items_bought if totals else 0,
            'money_saved': totals.money_saved if totals else Decimal('0.00'),
            'money_spent': totals.money_spent if totals else Decimal('0.00'),
            'pending_claims': claims['pending'],
            'redeemed_claims': claims['redeemed'],
        }

    @staticmethod
    def seller_summary(seller_id):
        """
        Inventory and redemption statistics for a seller's promotions.

        Args:
            seller_id (UUID): The seller's identifier.

        Returns:
            dict: A dictionary containing:
                - total_promotions (int)
                - approved_promotions (int)
                - awaiting_approval (int)
                - total_quantity (int): Units offered across promotions.
                - total_claimed (int): Units claimed, redeemed or not
                  (``used_quantity + pending``).
                - awaiting_redemption (int): Claimed but not scanned (``pending``).
                - total_redeemed (int): Units redeemed at the store (``used_quantity``).
                - promotions (list[dict]): Per-promotion breakdown with
                  ``id``, ``title``, ``quantity``, ``used_quantity``,
                  ``pending``, ``redeemed`` and ``remaining``.
        """
        promotions = Promotion.objects.filter(seller_id=seller_id)

        totals = promotions.aggregate(
            total_promotions=Count('id'),
            approved_promotions=Count('id', filter=Q(is_approved=True)),
            total_quantity=Coalesce(Sum('quantity'), 0),
            total_redeemed=Coalesce(Sum('used_quantity'), 0),
            awaiting_redemption=Coalesce(Sum('pending'), 0),
        )

        breakdown = list(
            promotions
            .annotate(
                redeemed=Count('claims', filter=Q(claims__scanned=True)),
                remaining=F('quantity') - F('used_quantity') - F('pending'),
            )
            .order_by('-created_at', '-id')
            .values('id', 'title', 'quantity', 'used_quantity', 'pending', 'redeemed', 'remaining')
        )

        return {
            'total_promotions': totals['total_promotions'],
            'approved_promotions': totals['approved_promotions'],
            'awaiting_approval': totals['total_promotions'] - totals['approved_promotions'],
            'total_quantity': totals['total_quantity'],
            'total_claimed': totals['total_redeemed'] + totals['awaiting_redemption'],
            'awaiting_redemption': totals['awaiting_redemption'],
            'total_redeemed': totals['total_redeemed'],
            'promotions': breakdown,
        }

    @staticmethod
    def admin_dashboard(growth_window_days=30, series_days=7, now=None):
        """
        Marketplace-wide statistics for the admin home screen.

        Args:
            growth_window_days (int): Users created within this many days
                count as "recent" for the growth rate. Default 30.
            series_days (int): Number of days in the sign-up series. Default 7.
            now (datetime, optional): Reference time, defaults to now.

        Returns:
            dict: A dictionary containing:
                - total_users (int): All accounts, any role.
                - total_sellers (int)
                - active_promotions (int): Approved promotions.
                - pending_promotions (int): Not approved.
                - average_promotion_duration (float): Mean of
                  ``end_date - start_date`` in days, 0 without promotions.
                - top_categories (list[dict]): Up to 3 industries with the
                  most promotions, as ``{'name', 'count'}``.
                - user_growth_rate (float): Percentage of users created in
                  the growth window, 0 without users.
                - user_growth_series (list[dict]): New users per day for the
                  last ``series_days`` days, oldest first, as ``{'date', 'count'}``.

        Raises:
            InvalidWindowError: If a window is smaller than one day.
        """
        if growth_window_days < 1 or series_days < 1:
            raise InvalidWindowError("Reporting windows must be at least one day")

        now = now or timezone.now()

        users = User.objects.aggregate(
            total=Count('id'),
            sellers=Count('id', filter=Q(role=Role.SELLER)),
            recent=Count('id', filter=Q(created_at__gt=now - timedelta(days=growth_window_days))),
        )

        promotions = Promotion.objects.aggregate(
            active=Count('id', filter=Q(is_approved=True)),
            pending=Count('id', filter=Q(is_approved=False)),
        )

        durations = [
            (end - start).days
            for start, end in Promotion.objects.values_list('start_date', 'end_date')
        ]
        average_duration = sum(durations) / len(durations) if durations else 0.0

        top_categories = [
            {'name': industry.name, 'count': industry.promotion_count}
            for industry in (
                Industry.objects
                .annotate(promotion_count=Count('promotions'))
                .order_by('-promotion_count', 'name')[:TOP_CATEGORIES_LIMIT]
            )
        ]

        growth_rate = (users['recent'] / users['total'] * 100) if users['total'] else 0.0

        return {
            'total_users': users['total'],
            'total_sellers': users['sellers'],
            'active_promotions': promotions['active'],
            'pending_promotions': promotions['pending'],
            'average_promotion_duration': round(average_duration, 1),
            'top_categories': top_categories,
            'user_growth_rate': round(growth_rate, 1),
            'user_growth_series': AnalyticsQueries._signups_per_day(now, series_days),
        }

    @staticmethod
    def _signups_per_day(now, days):
        """New users per calendar day, zero-filled, oldest first."""
        today = timezone.localdate(now)
        first_day = today - timedelta(days=days - 1)

        counts = dict(
            User.objects
            .filter(created_at__date__gte=first_day, created_at__date__lte=today)
            .order_by()
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(count=Count('id'))
            .values_list('day', 'count')
        )

        return [
            {'date': first_day + timedelta(days=offset),
             'count': counts.get(first_day + timedelta(days=offset), 0)}
            for offset in range(days)
        ]
