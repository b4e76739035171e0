from rest_framework import permissions

from .models import Role


class IsConsumer(permissions.BasePermission):
    """
    Permission: User must have the consumer role.
    """
    message = 'Only consumers can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated
                    and request.user.role == Role.USER)


class IsSeller(permissions.BasePermission):
    """
    Permission: User must have the seller role.
    """
    message = 'Only sellers can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated
                    and request.user.is_seller)


class IsMarketplaceAdmin(permissions.BasePermission):
    """
    Permission: User must have the admin role.
    """
    message = 'Only admins can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated
                    and request.user.is_marketplace_admin)
