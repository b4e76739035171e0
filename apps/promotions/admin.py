from django.contrib import admin
from django.utils.html import format_html

from .models import Industry, Promotion


@admin.register(Industry)
class IndustryAdmin(admin.ModelAdmin):
    list_display = ['name', 'icon']
    search_fields = ['name']


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    """Admin interface for promotions with approval actions."""

    list_display = [
        'title',
        'seller',
        'industry',
        'approval_badge',
        'quantity',
        'used_quantity',
        'pending',
        'promotional_price',
        'start_date',
        'end_date',
        'created_at',
    ]
    list_filter = ['is_approved', 'industry', 'start_date', 'created_at']
    search_fields = ['title', 'description', 'unique_code', 'seller__business_name', 'seller__email']
    raw_id_fields = ['seller']
    readonly_fields = ['unique_code', 'used_quantity', 'pending', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Promotion', {
            'fields': ('title', 'description', 'banner_url', 'industry', 'seller')
        }),
        ('Pricing', {
            'fields': ('original_price', 'promotional_price'),
        }),
        ('Inventory', {
            'fields': ('quantity', 'used_quantity', 'pending', 'unique_code'),
        }),
        ('Schedule', {
            'fields': ('start_date', 'end_date', 'is_approved'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    actions = ['approve_promotions', 'decline_promotions']

    def approval_badge(self, obj):
        """Display approval state as colored badge."""
        if obj.is_approved:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Approved</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Pending</span>'
        )
    approval_badge.short_description = 'Approval'
    approval_badge.admin_order_field = 'is_approved'

    @admin.action(description='Approve selected promotions')
    def approve_promotions(self, request, queryset):
        count = queryset.update(is_approved=True)
        self.message_user(request, f'Approved {count} promotion(s).')

    @admin.action(description='Decline selected promotions')
    def decline_promotions(self, request, queryset):
        count = queryset.update(is_approved=False)
        self.message_user(request, f'Declined {count} promotion(s).')

    def get_queryset(self, request):
        """Optimize query."""
        return super().get_queryset(request).select_related('seller', 'industry')
