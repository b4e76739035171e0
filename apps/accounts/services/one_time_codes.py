"""
One-time code service.

Issues 6-digit email codes (sign-up confirmation, password recovery) and
rate-limits verification attempts per email with a fixed cache window.
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.core.cache import cache
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import CodePurpose

from .exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

EMAIL_SUBJECTS = {
    CodePurpose.SIGNUP: 'Confirm your email',
    CodePurpose.RECOVERY: 'Your password reset code',
}


def generate_code(length=None) -> str:
    """Return a zero-padded numeric code of ``length`` digits."""
    length = length or settings.OTP_LENGTH
    return f"{secrets.randbelow(10 ** length):0{length}d}"


def issue_code(user, purpose: str) -> str:
    """
    Generate, store (hashed) and email a one-time code.

    The email is sent after the surrounding transaction commits.

    Returns:
        The plain code
    """
    code = generate_code()
    user.set_one_time_code(
        code,
        purpose,
        timezone.now() + timedelta(minutes=settings.OTP_EXPIRY_MINUTES),
    )
    user.save(update_fields=['otp_hash', 'otp_purpose', 'otp_expires_at'])

    email = user.email
    transaction.on_commit(lambda: _send_code_email(email, purpose, code))
    return code


def _send_code_email(email, purpose, code):
    try:
        send_mail(
            subject=EMAIL_SUBJECTS[purpose],
            message=f"Your verification code is {code}. "
                    f"It expires in {settings.OTP_EXPIRY_MINUTES} minutes.",
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[email],
        )
    except OSError:
        logger.exception("Failed to send %s code to %s", purpose, email)


def register_attempt(scope: str, identifier: str) -> int:
    """
    Count an attempt in the current window.

    At most ``OTP_MAX_ATTEMPTS`` attempts are allowed per
    ``OTP_ATTEMPT_WINDOW_SECONDS``; the window starts with the first attempt.

    Returns:
        Attempt number within the window

    Raises:
        RateLimitExceededError: If the limit is already reached
    """
    key = f"otp-attempts:{scope}:{identifier.lower()}"
    window = settings.OTP_ATTEMPT_WINDOW_SECONDS

    cache.add(key, 0, timeout=window)
    try:
        attempts = cache.incr(key)
    except ValueError:
        # Window expired between add() and incr()
        cache.set(key, 1, timeout=window)
        attempts = 1

    if attempts > settings.OTP_MAX_ATTEMPTS:
        logger.warning("Rate limit hit for %s (%s)", identifier, scope)
        raise RateLimitExceededError(
            f"Too many attempts. Please wait {window} seconds and try again."
        )
    return attempts
