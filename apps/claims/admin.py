from django.contrib import admin
from django.utils.html import format_html

from .models import ClaimedPromotion


@admin.register(ClaimedPromotion)
class ClaimedPromotionAdmin(admin.ModelAdmin):
    list_display = ['id', 'promotion', 'user', 'status_badge', 'claimed_at', 'scanned_at', 'scanned_by']
    list_filter = ['scanned', 'claimed_at']
    search_fields = ['user__email', 'promotion__title', 'promotion__unique_code']
    readonly_fields = ['id', 'promotion', 'user', 'claimed_at', 'scanned_at', 'scanned_by']
    date_hierarchy = 'claimed_at'

    def status_badge(self, obj):
        color, label = ('#6B8E5E', 'Redeemed') if obj.scanned else ('#A47449', 'Pending')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, label,
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'scanned'
