"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import CodePurpose, Role, AccountStatus

from .exceptions import UserRegistrationError
from .one_time_codes import issue_code

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    name: str = "",
    contact_number: str = ""
) -> User:
    """
    Register a new consumer and email a confirmation code.

    The account starts with role ``user`` and status ``pending`` until the
    email is confirmed.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        name: Optional full name
        contact_number: Optional phone number

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is taken or the row cannot be created
    """
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("An account with this email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                contact_number=contact_number,
                role=Role.USER,
                status=AccountStatus.PENDING,
            )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {e}")

    issue_code(user, CodePurpose.SIGNUP)
    logger.info("Registered user %s", user.id)

    return user
