"""
Navigation guard.

Maps ``(user, role, current route group)`` to the route the client must be
redirected to, or ``None`` when the current location is allowed. Route
groups are the top-level segments of the mobile app: ``(auth)``,
``confirm-email``, ``(tabs)``, ``(seller)``, ``(admin)``,
``edit-promotion``.
"""

from typing import Any, Optional

from .models import Role

AUTH_GROUP = '(auth)'
CONFIRM_EMAIL = 'confirm-email'
CONSUMER_GROUP = '(tabs)'
SELLER_GROUP = '(seller)'
ADMIN_GROUP = '(admin)'
EDIT_PROMOTION = 'edit-promotion'

SIGNUP_ROUTE = '/(auth)/signup'

ROLE_HOME = {
    Role.ADMIN: '/(admin)',
    Role.SELLER: '/(seller)',
    Role.USER: '/(tabs)',
}

PUBLIC_SEGMENTS = (AUTH_GROUP, CONFIRM_EMAIL)


def home_for(role: Optional[str]) -> str:
    """Landing route for a role; consumers and unknown roles go to (tabs)."""
    return ROLE_HOME.get(role, ROLE_HOME[Role.USER])


def resolve_redirect(
    user: Any,
    role: Optional[str],
    segment: Optional[str],
    loading: bool = False
) -> Optional[str]:
    """
    Decide where the client should be, given who it is and where it is.

    Args:
        user: Authenticated user, or None
        role: Resolved role ('user', 'seller', 'admin') or None
        segment: First route segment the client is on
        loading: True while the role is still being resolved

    Returns:
        Redirect target, or None to stay
    """
    if loading:
        return None

    if user is None:
        if segment in PUBLIC_SEGMENTS:
            return None
        return SIGNUP_ROUTE

    if segment in PUBLIC_SEGMENTS:
        return home_for(role)

    if segment == EDIT_PROMOTION:
        return None

    if segment == SELLER_GROUP and role != Role.SELLER:
        return ROLE_HOME[Role.USER]
    if segment == ADMIN_GROUP and role != Role.ADMIN:
        return ROLE_HOME[Role.USER]

    if role == Role.SELLER and segment != SELLER_GROUP:
        return ROLE_HOME[Role.SELLER]
    if role == Role.ADMIN and segment != ADMIN_GROUP:
        return ROLE_HOME[Role.ADMIN]

    return None
