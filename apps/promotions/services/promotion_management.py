"""Promotion create / update / delete operations (seller side)."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError

from apps.accounts.models import Role
from apps.common.storage import blob_storage

from ..models import Industry, Promotion, generate_unique_code
from .exceptions import (
    PromotionNotFoundError,
    PromotionValidationError,
    InsufficientPermissionsError,
    UniqueCodeExhaustedError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

MAX_UNIQUE_CODE_ATTEMPTS = 5

UPDATABLE_FIELDS = [
    'title', 'description', 'industry_id', 'original_price',
    'promotional_price', 'quantity', 'start_date', 'end_date',
]


def _to_decimal(value, field: str) -> Optional[Decimal]:
    if value is None or value == '':
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise PromotionValidationError(f"{field} must be a number")


def validate_promotion_fields(
    *,
    title: str,
    description: str,
    industry_id: Any,
    quantity: Any,
    promotional_price: Any,
    original_price: Any,
    start_date: date,
    end_date: date
) -> Dict[str, Any]:
    """
    Validate and normalize promotion fields.

    Returns:
        Cleaned field values ready for the model

    Raises:
        PromotionValidationError: On the first invalid field
    """
    if not title or not str(title).strip():
        raise PromotionValidationError("Title is required")
    if not description or not str(description).strip():
        raise PromotionValidationError("Description is required")

    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        raise PromotionValidationError("Quantity must be a whole number")
    if quantity < 1:
        raise PromotionValidationError("Quantity must be at least 1")

    promotional_price = _to_decimal(promotional_price, 'promotional_price')
    if promotional_price is None or promotional_price <= 0:
        raise PromotionValidationError("Promotional price must be greater than 0")

    original_price = _to_decimal(original_price, 'original_price')
    if original_price is not None and original_price <= 0:
        raise PromotionValidationError("Original price must be greater than 0")

    if start_date is None or end_date is None:
        raise PromotionValidationError("Start and end dates are required")
    if start_date > end_date:
        raise PromotionValidationError("Start date must be on or before end date")

    if not Industry.objects.filter(id=industry_id).exists():
        raise PromotionValidationError(f"Industry {industry_id} does not exist")

    return {
        'title': str(title).strip(),
        'description': str(description).strip(),
        'industry_id': industry_id,
        'quantity': quantity,
        'promotional_price': promotional_price,
        'original_price': original_price,
        'start_date': start_date,
        'end_date': end_date,
    }


def create_promotion(
    *,
    seller: User,
    title: str,
    description: str,
    industry_id: int,
    quantity: int,
    promotional_price,
    start_date: date,
    end_date: date,
    banner,
    original_price=None
) -> Promotion:
    """
    Create a promotion awaiting admin approval.

    The banner is uploaded to the banner bucket first; the row is inserted
    with its public URL, ``is_approved=False`` and a fresh unique code.
    If the insert fails the uploaded banner is removed again.

    Args:
        seller: Creating user, must have the seller role
        banner: Uploaded image file

    Returns:
        Created Promotion instance

    Raises:
        InsufficientPermissionsError: If the caller is not a seller
        PromotionValidationError: If any field is missing or invalid
        StorageError: If the banner upload fails
        UniqueCodeExhaustedError: If no free unique code was found
    """
    if seller.role != Role.SELLER:
        raise InsufficientPermissionsError("Only sellers can create promotions")

    fields = validate_promotion_fields(
        title=title,
        description=description,
        industry_id=industry_id,
        quantity=quantity,
        promotional_price=promotional_price,
        original_price=original_price,
        start_date=start_date,
        end_date=end_date,
    )
    if banner is None:
        raise PromotionValidationError("Banner image is required")

    banner_path = blob_storage.store_image(settings.BANNER_BUCKET, seller.id, banner)
    banner_url = blob_storage.get_public_url(settings.BANNER_BUCKET, banner_path)

    try:
        promotion = _insert_with_unique_code(seller=seller, banner_url=banner_url, **fields)
    except (UniqueCodeExhaustedError, IntegrityError):
        blob_storage.delete(settings.BANNER_BUCKET, banner_path)
        raise

    logger.info(
        "Promotion %s created by seller %s (quantity=%d)",
        promotion.id, seller.id, promotion.quantity
    )
    return promotion


def _insert_with_unique_code(**fields) -> Promotion:
    for attempt in range(1, MAX_UNIQUE_CODE_ATTEMPTS + 1):
        code = generate_unique_code()
        try:
            with transaction.atomic():
                return Promotion.objects.create(
                    unique_code=code,
                    is_approved=False,
                    used_quantity=0,
                    pending=0,
                    **fields
                )
        except IntegrityError:
            if not Promotion.objects.filter(unique_code=code).exists():
                raise
            logger.warning("Unique code collision on %s (attempt %d)", code, attempt)

    raise UniqueCodeExhaustedError("Could not generate a unique promotion code")


def _get_owned_promotion(promotion_id: int, seller: User) -> Promotion:
    try:
        promotion = Promotion.objects.select_for_update().get(id=promotion_id)
    except Promotion.DoesNotExist:
        raise PromotionNotFoundError(f"Promotion {promotion_id} not found")

    if promotion.seller_id != seller.id:
        raise InsufficientPermissionsError("You can only manage your own promotions")
    return promotion


@transaction.atomic
def update_promotion(
    *,
    promotion_id: int,
    seller: User,
    data: Dict[str, Any],
    banner=None
) -> Promotion:
    """
    Update a seller's own promotion.

    Only the fields in UPDATABLE_FIELDS are applied. Quantity can not drop
    below the units already claimed (redeemed plus pending).

    Raises:
        PromotionNotFoundError: If promotion doesn't exist
        InsufficientPermissionsError: If the promotion belongs to another seller
        PromotionValidationError: If the merged values are invalid
    """
    promotion = _get_owned_promotion(promotion_id, seller)

    merged = {field: getattr(promotion, field) for field in UPDATABLE_FIELDS}
    merged.update({k: v for k, v in data.items() if k in UPDATABLE_FIELDS})

    fields = validate_promotion_fields(**merged)
    taken = promotion.used_quantity + promotion.pending
    if fields['quantity'] < taken:
        raise PromotionValidationError(
            f"Quantity can not be lower than the {taken} units already claimed"
        )

    for field, value in fields.items():
        setattr(promotion, field, value)

    if banner is not None:
        promotion.banner_url = blob_storage.upload_image(settings.BANNER_BUCKET, seller.id, banner)

    promotion.save()
    logger.info("Promotion %s updated by seller %s", promotion.id, seller.id)
    return promotion


@transaction.atomic
def delete_promotion(*, promotion_id: int, seller: User) -> None:
    """
    Delete a seller's own promotion and its claims.

    Raises:
        PromotionNotFoundError: If promotion doesn't exist
        InsufficientPermissionsError: If the promotion belongs to another seller
    """
    promotion = _get_owned_promotion(promotion_id, seller)
    promotion.delete()
    logger.info("Promotion %s deleted by seller %s", promotion_id, seller.id)
