"""
Identity & role resolution.

``resolve_role`` is the point lookup of a user's role. ``RoleResolver``
is a small state machine fed with session events::

    Unknown(loading) -> Authenticated(role) | Unauthenticated

The role lookup is injected, so the machine runs without a database.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from apps.accounts.models import Role

User = get_user_model()
logger = logging.getLogger(__name__)


class SessionEvent(str, Enum):
    INITIAL_SESSION = 'INITIAL_SESSION'
    SIGNED_IN = 'SIGNED_IN'
    SIGNED_OUT = 'SIGNED_OUT'
    USER_UPDATED = 'USER_UPDATED'
    TOKEN_REFRESHED = 'TOKEN_REFRESHED'


class ResolverState(str, Enum):
    UNKNOWN = 'unknown'
    AUTHENTICATED = 'authenticated'
    UNAUTHENTICATED = 'unauthenticated'


@dataclass(frozen=True)
class AuthState:
    """Snapshot exposed to consumers of the resolver."""

    user: Any = None
    role: Optional[str] = None
    loading: bool = True

    @property
    def state(self) -> ResolverState:
        if self.loading:
            return ResolverState.UNKNOWN
        if self.user is None:
            return ResolverState.UNAUTHENTICATED
        return ResolverState.AUTHENTICATED


def resolve_role(user_id: UUID) -> Optional[str]:
    """
    Look up the role of a user.

    Returns:
        'user', 'seller', 'admin', or None if the lookup fails
    """
    try:
        role = User.objects.values_list('role', flat=True).get(id=user_id)
    except User.DoesNotExist:
        logger.warning("Role lookup failed: user %s not found", user_id)
        return None
    except DatabaseError:
        logger.exception("Role lookup failed for user %s", user_id)
        return None

    if role not in Role.values:
        logger.warning("User %s has unknown role %r", user_id, role)
        return None
    return role


class RoleResolver:
    """
    Tracks ``{user, role, loading}`` across session events.

    Args:
        role_lookup: Callable mapping a user id to a role (or None).
            Exceptions raised by it are logged and treated as "no role".

    Example::

        resolver = RoleResolver(role_lookup=resolve_role)
        resolver.subscribe(lambda state: print(state))
        resolver.handle(SessionEvent.SIGNED_IN, user)
        resolver.state.role  # 'seller'
    """

    def __init__(self, role_lookup: Callable[[Any], Optional[str]] = resolve_role):
        self._role_lookup = role_lookup
        self._state = AuthState()
        self._listeners: List[Callable[[AuthState], None]] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: Callable[[AuthState], None]) -> Callable[[], None]:
        """Register a listener; returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def start(self, session_user=None) -> AuthState:
        """Initial session check: resolve the current user, if any."""
        if session_user is not None:
            return self.handle(SessionEvent.INITIAL_SESSION, session_user)
        return self._publish(AuthState(user=None, role=None, loading=False))

    def handle(self, event, session_user=None) -> AuthState:
        """Apply a session event and return the new state."""
        event = SessionEvent(event)
        logger.debug("Auth state change: %s %s", event.value, getattr(session_user, 'id', None))

        current = self._state
        if event in (SessionEvent.SIGNED_IN, SessionEvent.INITIAL_SESSION):
            if session_user is not None:
                return self._publish(AuthState(
                    user=session_user,
                    role=self._lookup(session_user),
                    loading=False,
                ))
            return self._publish(AuthState(current.user, current.role, loading=False))

        if event == SessionEvent.SIGNED_OUT:
            return self._publish(AuthState(user=None, role=None, loading=False))

        # USER_UPDATED (password change) and TOKEN_REFRESHED keep the session
        return self._publish(AuthState(current.user, current.role, loading=False))

    def _lookup(self, session_user) -> Optional[str]:
        try:
            return self._role_lookup(session_user.id)
        except Exception:
            logger.exception("Error fetching role for user %s", session_user.id)
            return None

    def _publish(self, state: AuthState) -> AuthState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state
