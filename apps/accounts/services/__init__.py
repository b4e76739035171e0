"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    UserNotFoundError,
    PasswordConfirmationError,
    RateLimitExceededError,
    InsufficientPermissionsError,
    InvalidRoleError,
    EmailNotConfirmedError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .email_verification import verify_user_email, resend_confirmation_code
from .password_reset import (
    request_password_reset,
    verify_password_reset_code,
    confirm_password_reset,
)
from .role_resolution import (
    AuthState,
    ResolverState,
    RoleResolver,
    SessionEvent,
    resolve_role,
)
from .profile_management import update_profile, upload_business_logo
from .role_management import list_users, update_user_role

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    'RateLimitExceededError',
    'InsufficientPermissionsError',
    'InvalidRoleError',
    'EmailNotConfirmedError',
    # Authentication
    'register_user',
    'authenticate_user',
    'verify_user_email',
    'resend_confirmation_code',
    'request_password_reset',
    'verify_password_reset_code',
    'confirm_password_reset',
    # Role resolution
    'AuthState',
    'ResolverState',
    'RoleResolver',
    'SessionEvent',
    'resolve_role',
    # Profiles
    'update_profile',
    'upload_business_logo',
    'list_users',
    'update_user_role',
]
