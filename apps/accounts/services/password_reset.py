"""
Password reset service.

Three steps, mirroring the mobile flow: request a 6-digit recovery code by
email, verify it (rate-limited), then set the new password with the reset
token returned by verification.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.db import transaction

from apps.accounts.models import AccountStatus, CodePurpose

from .exceptions import (
    UserNotFoundError,
    InvalidTokenError,
    PasswordConfirmationError,
)
from .one_time_codes import issue_code, register_attempt

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def request_password_reset(*, email: str) -> None:
    """
    Email a recovery code to an active user.

    Args:
        email: User's email address

    Raises:
        UserNotFoundError: If no active user has this email
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No active user with email: {email}")

    issue_code(user, CodePurpose.RECOVERY)
    logger.info("Recovery code issued for user %s", user.id)


@transaction.atomic
def verify_password_reset_code(*, email: str, code: str) -> str:
    """
    Check a recovery code and exchange it for a reset token.

    The code was delivered to the mailbox, so an account still waiting
    for its sign-up confirmation is confirmed as well.

    Args:
        email: User's email address
        code: 6-digit recovery code

    Returns:
        Reset token to pass to confirm_password_reset

    Raises:
        RateLimitExceededError: If more than 3 attempts in 60 seconds
        InvalidTokenError: If the code is wrong or expired
    """
    register_attempt(CodePurpose.RECOVERY, email)

    if len(code) != settings.OTP_LENGTH or not code.isdigit():
        raise InvalidTokenError(f"Please enter the {settings.OTP_LENGTH}-digit code")

    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid verification code")

    if not user.check_one_time_code(code, CodePurpose.RECOVERY):
        raise InvalidTokenError("Invalid verification code")

    update_fields = ['otp_hash', 'otp_purpose', 'otp_expires_at']
    if not user.email_verified:
        user.email_verified = True
        user.status = AccountStatus.ACTIVE
        update_fields += ['email_verified', 'status']
        logger.info("Email confirmed by recovery code for user %s", user.id)

    user.clear_one_time_code()
    user.save(update_fields=update_fields)

    return default_token_generator.make_token(user)


@transaction.atomic
def confirm_password_reset(
    *,
    email: str,
    token: str,
    new_password: str,
    new_password_confirm: str
) -> User:
    """
    Set a new password using the reset token from verification.

    Args:
        email: User's email address
        token: Reset token
        new_password: New password
        new_password_confirm: Repeated new password

    Returns:
        User instance

    Raises:
        PasswordConfirmationError: If passwords differ or are too short
        InvalidTokenError: If the token is invalid or already used
    """
    if new_password != new_password_confirm:
        raise PasswordConfirmationError("Passwords don't match")

    if len(new_password) < settings.MIN_PASSWORD_LENGTH:
        raise PasswordConfirmationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )

    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    if not default_token_generator.check_token(user, token):
        raise InvalidTokenError("Invalid or expired reset token")

    # Changing the hash invalidates the token
    user.set_password(new_password)
    user.save(update_fields=['password'])

    logger.info("Password reset for user %s", user.id)
    return user
