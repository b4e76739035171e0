"""Domain-specific exceptions for accounts services."""

from rest_framework import status

from apps.common.exceptions import ServiceError


class AccountsServiceError(ServiceError):
    """Base exception for accounts services."""
    code = 'accounts_error'


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    code = 'registration_failed'


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    code = 'invalid_credentials'
    status_code = status.HTTP_401_UNAUTHORIZED


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    code = 'inactive_account'
    status_code = status.HTTP_403_FORBIDDEN


class InvalidTokenError(AccountsServiceError):
    """Raised when a confirmation or recovery code is invalid or expired."""
    code = 'invalid_code'


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    code = 'user_not_found'
    status_code = status.HTTP_404_NOT_FOUND


class PasswordConfirmationError(AccountsServiceError):
    """Raised when password confirmation fails."""
    code = 'password_mismatch'


class RateLimitExceededError(AccountsServiceError):
    """Raised when too many code attempts were made in the current window."""
    code = 'rate_limited'
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    retryable = True


class InsufficientPermissionsError(AccountsServiceError):
    """Raised when a user lacks the role required for an action."""
    code = 'forbidden'
    status_code = status.HTTP_403_FORBIDDEN


class InvalidRoleError(AccountsServiceError):
    """Raised when a role value is not one of user, seller, admin."""
    code = 'invalid_role'


class EmailNotConfirmedError(AccountsServiceError):
    """Raised when signing in before the email was confirmed."""
    code = 'email_not_confirmed'
    status_code = status.HTTP_403_FORBIDDEN
