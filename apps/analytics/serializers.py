"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DashboardQuerySerializer - Validates admin dashboard windows

Response Serializers:
    UserSummarySerializer - Consumer totals and claim counts
    SellerSummarySerializer - Seller inventory with per-promotion breakdown
    AdminDashboardSerializer - Marketplace-wide statistics
"""

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DashboardQuerySerializer(serializers.Serializer):
    """
    Validate admin dashboard query parameters.

    Used by: admin_dashboard

    Query Parameters:
        growth_window (int): Days counted as "recent" for the growth rate
            (1-365, default 30)
        series_days (int): Days in the sign-up series (1-90, default 7)
    """

    growth_window = serializers.IntegerField(
        required=False,
        default=30,
        min_value=1,
        max_value=365,
        help_text='Days counted as recent for the user growth rate'
    )
    series_days = serializers.IntegerField(
        required=False,
        default=7,
        min_value=1,
        max_value=90,
        help_text='Days in the new-users-per-day series'
    )


# =============================================================================
# Response Serializers (API Documentation & Output Formatting)
# =============================================================================

class UserSummarySerializer(serializers.Serializer):
    """Consumer's running totals."""
    items_bought = serializers.IntegerField()
    money_saved = serializers.DecimalField(max_digits=12, decimal_places=2)
    money_spent = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_claims = serializers.IntegerField()
    redeemed_claims = serializers.IntegerField()


class SellerPromotionStatsSerializer(serializers.Serializer):
    """Inventory of a single promotion."""
    id = serializers.IntegerField()
    title = serializers.CharField()
    quantity = serializers.IntegerField()
    used_quantity = serializers.IntegerField()
    pending = serializers.IntegerField()
    redeemed = serializers.IntegerField()
    remaining = serializers.IntegerField()


class SellerSummarySerializer(serializers.Serializer):
    """Seller's totals with a per-promotion breakdown."""
    total_promotions = serializers.IntegerField()
    approved_promotions = serializers.IntegerField()
    awaiting_approval = serializers.IntegerField()
    total_quantity = serializers.IntegerField()
    total_claimed = serializers.IntegerField()
    awaiting_redemption = serializers.IntegerField()
    total_redeemed = serializers.IntegerField()
    promotions = SellerPromotionStatsSerializer(many=True)


class CategoryCountSerializer(serializers.Serializer):
    name = serializers.CharField()
    count = serializers.IntegerField()


class DailyCountSerializer(serializers.Serializer):
    date = serializers.DateField()
    count = serializers.IntegerField()


class AdminDashboardSerializer(serializers.Serializer):
    """Marketplace-wide statistics for the admin home screen."""
    total_users = serializers.IntegerField()
    total_sellers = serializers.IntegerField()
    active_promotions = serializers.IntegerField()
    pending_promotions = serializers.IntegerField()
    average_promotion_duration = serializers.FloatField()
    top_categories = CategoryCountSerializer(many=True)
    user_growth_rate = serializers.FloatField()
    user_growth_series = DailyCountSerializer(many=True)
