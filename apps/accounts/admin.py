from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import AccountStatus, Role, User

ROLE_COLORS = {
    Role.ADMIN: '#B85C5C',
    Role.SELLER: '#A47449',
    Role.USER: '#6B8E5E',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for marketplace identities.

    - Listing with role and status badges
    - Filtering by role, status and verification
    - Bulk actions to change roles and activate accounts
    """

    list_display = [
        'email',
        'name',
        'business_name',
        'role_badge',
        'status',
        'email_verified',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'status',
        'email_verified',
        'is_active',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
        'business_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'password', 'role', 'status')
        }),
        ('Profile', {
            'fields': ('name', 'contact_number'),
        }),
        ('Business', {
            'fields': ('business_name', 'business_logo', 'latitude', 'longitude'),
            'classes': ('collapse',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Verification', {
            'fields': ('email_verified', 'otp_purpose', 'otp_expires_at'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
        'otp_purpose',
        'otp_expires_at',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#ccc'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = [
        'make_sellers',
        'make_consumers',
        'activate_accounts',
    ]

    @admin.action(description='Set role to seller')
    def make_sellers(self, request, queryset):
        count = queryset.exclude(role=Role.ADMIN).update(role=Role.SELLER)
        self.message_user(request, f'{count} user(s) are now sellers.')

    @admin.action(description='Set role to user')
    def make_consumers(self, request, queryset):
        count = queryset.exclude(role=Role.ADMIN).update(role=Role.USER)
        self.message_user(request, f'{count} user(s) are now consumers.')

    @admin.action(description='Activate selected accounts')
    def activate_accounts(self, request, queryset):
        """Mark accounts as confirmed (skips the email code)."""
        count = queryset.update(status=AccountStatus.ACTIVE, email_verified=True)
        self.message_user(request, f'Activated {count} account(s).')
