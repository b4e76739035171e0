"""
Redemption (scan) service.

The seller's scanner posts the string read from the consumer's QR code.
A scan flips exactly one unscanned claim to redeemed and, in the same
transaction, moves its unit from the promotion's ``pending`` counter to
``used_quantity``. Each seller has a short cooldown between scan attempts
so that a camera reading the same code several times in a row produces one
redemption attempt.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import Role
from apps.promotions.models import Promotion

from ..models import ClaimedPromotion
from ..qr import parse_qr_payload, MalformedPayloadError
from .exceptions import (
    PromotionNotFoundError,
    InvalidCodeError,
    UnauthorizedScanError,
    NotClaimedError,
    AlreadyScannedError,
    ScanCooldownError,
    InsufficientPermissionsError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def _cooldown_key(seller_id):
    return f"scan-cooldown:{seller_id}"


def _acquire_scan_slot(seller):
    """Start the seller's cooldown, or fail if one is already running."""
    timeout = settings.SCAN_COOLDOWN_SECONDS
    if timeout <= 0:
        return
    if not cache.add(_cooldown_key(seller.id), 1, timeout=timeout):
        raise ScanCooldownError("Please wait before scanning again")


def scan_promotion(*, seller: User, scanned_code: str) -> ClaimedPromotion:
    """
    Redeem the claim identified by a scanned QR payload.

    Every attempt, successful or not, starts the seller's cooldown.

    Args:
        seller: Seller operating the scanner
        scanned_code: Raw string read from the QR code

    Returns:
        The redeemed ClaimedPromotion

    Raises:
        InsufficientPermissionsError: If caller is not a seller
        ScanCooldownError: If the previous attempt was too recent
        InvalidCodeError: If the payload matches no promotion
        UnauthorizedScanError: If the promotion belongs to another seller
        NotClaimedError: If the payload identifies no claim of this promotion
        AlreadyScannedError: If the claim was already redeemed
    """
    if seller.role != Role.SELLER:
        raise InsufficientPermissionsError("Only sellers can scan promotions")

    _acquire_scan_slot(seller)

    try:
        claim = _redeem(seller, scanned_code)
    except (InvalidCodeError, UnauthorizedScanError, NotClaimedError, AlreadyScannedError) as e:
        logger.info("Scan by seller %s rejected: %s (%s)", seller.id, e.code, e)
        raise

    logger.info(
        "Claim %s on promotion %s redeemed by seller %s",
        claim.id, claim.promotion_id, seller.id
    )
    return claim


@transaction.atomic
def _redeem(seller, scanned_code):
    try:
        unique_code, claim_id = parse_qr_payload(scanned_code)
    except MalformedPayloadError:
        raise InvalidCodeError("Invalid QR code")

    try:
        promotion = Promotion.objects.get(unique_code=unique_code)
    except Promotion.DoesNotExist:
        raise InvalidCodeError("Invalid QR code")

    if promotion.seller_id != seller.id:
        raise UnauthorizedScanError("This promotion belongs to another seller")

    if claim_id is None:
        raise NotClaimedError("This code does not identify a claimed promotion")

    try:
        claim = (
            ClaimedPromotion.objects
            .select_for_update()
            .get(id=claim_id, promotion=promotion)
        )
    except ClaimedPromotion.DoesNotExist:
        raise NotClaimedError("This promotion has not been claimed")

    if claim.scanned:
        raise AlreadyScannedError("This promotion has already been redeemed")

    now = timezone.now()
    claim.scanned = True
    claim.scanned_at = now
    claim.scanned_by = seller
    claim.save(update_fields=['scanned', 'scanned_at', 'scanned_by'])

    Promotion.objects.filter(id=promotion.id, pending__gt=0).update(
        pending=F('pending') - 1,
        used_quantity=F('used_quantity') + 1,
        updated_at=now,
    )
    return claim


def list_promotion_claims(*, seller: User, promotion_id: int, scanned=None):
    """
    Claims on one of the seller's promotions, newest first.

    Raises:
        PromotionNotFoundError: If the promotion doesn't exist
        UnauthorizedScanError: If it belongs to another seller
    """
    try:
        promotion = Promotion.objects.get(id=promotion_id)
    except Promotion.DoesNotExist:
        raise PromotionNotFoundError(f"Promotion {promotion_id} not found")

    if promotion.seller_id != seller.id:
        raise UnauthorizedScanError("This promotion belongs to another seller")

    queryset = promotion.claims.select_related('user')
    if scanned is not None:
        queryset = queryset.filter(scanned=scanned)
    return queryset.order_by('-claimed_at')
