"""Email verification service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.accounts.models import AccountStatus, CodePurpose

from .exceptions import InvalidTokenError, UserNotFoundError
from .one_time_codes import issue_code, register_attempt

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def verify_user_email(*, email: str, code: str) -> User:
    """
    Confirm a user's email with the code sent at sign-up.

    Args:
        email: User's email
        code: 6-digit confirmation code

    Returns:
        Activated User instance

    Raises:
        RateLimitExceededError: If too many attempts were made
        InvalidTokenError: If the code is invalid or expired
    """
    register_attempt(CodePurpose.SIGNUP, email)

    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid verification code")

    if not user.check_one_time_code(code, CodePurpose.SIGNUP):
        raise InvalidTokenError("Invalid verification code")

    user.email_verified = True
    user.status = AccountStatus.ACTIVE
    user.clear_one_time_code()
    user.save(update_fields=[
        'email_verified', 'status', 'otp_hash', 'otp_purpose', 'otp_expires_at'
    ])

    logger.info("Email confirmed for user %s", user.id)
    return user


@transaction.atomic
def resend_confirmation_code(*, email: str) -> None:
    """
    Send a new confirmation code to an unconfirmed account.

    Raises:
        UserNotFoundError: If no unconfirmed account exists for the email
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, email_verified=False)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No unconfirmed account for {email}")

    issue_code(user, CodePurpose.SIGNUP)
