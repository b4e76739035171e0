"""
Service layer unit tests for claims app.

Tests cover:
- Claiming: inventory counters, analytics, sold-out and duplicate rules
- Claiming with a stale view of the promotion
- Scanning: redemption, ownership, double scans, malformed codes
- Per-seller scan cooldown
"""

import uuid
import pytest
from decimal import Decimal
from unittest.mock import patch
from django.core.cache import cache

from apps.analytics.models import UserAnalytics
from apps.claims.models import ClaimedPromotion
from apps.claims.qr import build_qr_payload
from apps.claims.services import (
    claim_promotion,
    list_user_claims,
    get_user_claim,
    scan_promotion,
    list_promotion_claims,
)
from apps.claims.services.exceptions import (
    PromotionNotFoundError,
    ClaimNotFoundError,
    PromotionNotApprovedError,
    SoldOutError,
    AlreadyClaimedError,
    InvalidCodeError,
    UnauthorizedScanError,
    NotClaimedError,
    AlreadyScannedError,
    ScanCooldownError,
    InsufficientPermissionsError,
)
from apps.promotions.models import Promotion


# =============================================================================
# Claiming
# =============================================================================

@pytest.mark.django_db
class TestClaimPromotion:

    def test_claim_updates_counters(self, consumer, promotion):
        claim = claim_promotion(user=consumer, promotion_id=promotion.id)

        promotion.refresh_from_db()
        assert claim.scanned is False
        assert claim.user == consumer
        assert promotion.pending == 1
        assert promotion.used_quantity == 0
        assert promotion.remaining_quantity == 9

    def test_claim_updates_analytics(self, consumer, promotion):
        claim_promotion(user=consumer, promotion_id=promotion.id)

        analytics = UserAnalytics.objects.get(user=consumer)
        assert analytics.items_bought == 1
        assert analytics.money_spent == Decimal('2.50')
        assert analytics.money_saved == Decimal('1.50')

    def test_no_savings_without_original_price(self, consumer, promotion_factory):
        promotion = promotion_factory(original_price=None)

        claim_promotion(user=consumer, promotion_id=promotion.id)

        analytics = UserAnalytics.objects.get(user=consumer)
        assert analytics.money_saved == Decimal('0.00')
        assert analytics.money_spent == Decimal('2.50')

    def test_last_unit(self, consumer, other_consumer, last_unit_promotion):
        claim_promotion(user=consumer, promotion_id=last_unit_promotion.id)

        with pytest.raises(SoldOutError):
            claim_promotion(user=other_consumer, promotion_id=last_unit_promotion.id)

        last_unit_promotion.refresh_from_db()
        assert last_unit_promotion.pending == 1
        assert last_unit_promotion.used_quantity == 0
        assert ClaimedPromotion.objects.filter(promotion=last_unit_promotion).count() == 1
        assert not UserAnalytics.objects.filter(user=other_consumer).exists()

    def test_already_claimed(self, consumer, promotion):
        claim_promotion(user=consumer, promotion_id=promotion.id)

        with pytest.raises(AlreadyClaimedError):
            claim_promotion(user=consumer, promotion_id=promotion.id)

        promotion.refresh_from_db()
        assert promotion.pending == 1
        assert UserAnalytics.objects.get(user=consumer).items_bought == 1

    def test_duplicate_claim_past_the_existence_check(self, consumer, promotion):
        """A second claim by the same user that races past the pre-check hits the unique constraint."""
        claim_promotion(user=consumer, promotion_id=promotion.id)

        with patch('apps.claims.services.claim_workflow._has_claimed', return_value=False):
            with pytest.raises(AlreadyClaimedError):
                claim_promotion(user=consumer, promotion_id=promotion.id)

        promotion.refresh_from_db()
        assert promotion.pending == 1
        assert promotion.used_quantity == 0
        assert ClaimedPromotion.objects.filter(user=consumer, promotion=promotion).count() == 1
        assert UserAnalytics.objects.get(user=consumer).items_bought == 1

    def test_not_approved(self, consumer, promotion_factory):
        promotion = promotion_factory(is_approved=False)

        with pytest.raises(PromotionNotApprovedError):
            claim_promotion(user=consumer, promotion_id=promotion.id)

        promotion.refresh_from_db()
        assert promotion.pending == 0

    def test_not_found(self, consumer):
        with pytest.raises(PromotionNotFoundError):
            claim_promotion(user=consumer, promotion_id=999999)

    @pytest.mark.parametrize('fixture_name', ['seller', 'admin_user'])
    def test_only_consumers_claim(self, request, promotion, fixture_name):
        user = request.getfixturevalue(fixture_name)

        with pytest.raises(InsufficientPermissionsError):
            claim_promotion(user=user, promotion_id=promotion.id)

        assert not ClaimedPromotion.objects.exists()


@pytest.mark.django_db
class TestClaimWithStaleRead:
    """The inventory check must not trust what was read before the update."""

    def test_stale_available_promotion_is_sold_out(self, consumer, promotion_factory):
        promotion = promotion_factory(quantity=2)
        stale = Promotion.objects.get(id=promotion.id)
        Promotion.objects.filter(id=promotion.id).update(used_quantity=1, pending=1)

        with patch('apps.claims.services.claim_workflow._get_promotion', return_value=stale):
            with pytest.raises(SoldOutError):
                claim_promotion(user=consumer, promotion_id=promotion.id)

        promotion.refresh_from_db()
        assert promotion.used_quantity == 1
        assert promotion.pending == 1
        assert not ClaimedPromotion.objects.filter(user=consumer).exists()
        assert not UserAnalytics.objects.filter(user=consumer).exists()

    def test_stale_approved_promotion_was_declined(self, consumer, promotion):
        stale = Promotion.objects.get(id=promotion.id)
        Promotion.objects.filter(id=promotion.id).update(is_approved=False)

        with patch('apps.claims.services.claim_workflow._get_promotion', return_value=stale):
            with pytest.raises(PromotionNotApprovedError):
                claim_promotion(user=consumer, promotion_id=promotion.id)

        promotion.refresh_from_db()
        assert promotion.pending == 0


@pytest.mark.django_db
class TestClaimListing:

    def test_list_by_status(self, consumer, promotion_factory):
        first = claim_promotion(user=consumer, promotion_id=promotion_factory(title='A').id)
        second = claim_promotion(user=consumer, promotion_id=promotion_factory(title='B').id)
        ClaimedPromotion.objects.filter(id=first.id).update(scanned=True)

        assert [c.id for c in list_user_claims(user=consumer, scanned=False)] == [second.id]
        assert [c.id for c in list_user_claims(user=consumer, scanned=True)] == [first.id]
        assert list_user_claims(user=consumer).count() == 2

    def test_get_claim_of_other_user(self, other_consumer, claim):
        with pytest.raises(ClaimNotFoundError):
            get_user_claim(user=other_consumer, claim_id=claim.id)

    def test_get_own_claim(self, consumer, claim):
        assert get_user_claim(user=consumer, claim_id=claim.id) == claim


# =============================================================================
# Scanning
# =============================================================================

@pytest.mark.django_db
class TestScanPromotion:

    def test_scan_redeems_claim(self, seller, claim, promotion):
        redeemed = scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        assert redeemed.id == claim.id
        claim.refresh_from_db()
        assert claim.scanned is True
        assert claim.scanned_at is not None
        assert claim.scanned_by == seller

        promotion.refresh_from_db()
        assert promotion.pending == 0
        assert promotion.used_quantity == 1

    def test_claim_then_scan(self, consumer, seller, promotion):
        claim = claim_promotion(user=consumer, promotion_id=promotion.id)

        scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        promotion.refresh_from_db()
        assert promotion.used_quantity == 1
        assert promotion.pending == 0
        assert promotion.used_quantity == (
            ClaimedPromotion.objects.filter(promotion=promotion, scanned=True).count()
        )

    def test_counters_stay_within_quantity(self, consumer, seller, last_unit_promotion):
        claim = claim_promotion(user=consumer, promotion_id=last_unit_promotion.id)

        last_unit_promotion.refresh_from_db()
        assert last_unit_promotion.used_quantity + last_unit_promotion.pending <= 1
        assert last_unit_promotion.is_sold_out is True

        scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        last_unit_promotion.refresh_from_db()
        assert last_unit_promotion.used_quantity == 1
        assert last_unit_promotion.pending == 0
        assert last_unit_promotion.remaining_quantity == 0

    def test_second_scan_rejected(self, seller, claim, promotion, no_scan_cooldown):
        scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        with pytest.raises(AlreadyScannedError):
            scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        promotion.refresh_from_db()
        assert promotion.pending == 0

    def test_other_sellers_promotion(self, other_seller, claim, promotion):
        with pytest.raises(UnauthorizedScanError):
            scan_promotion(seller=other_seller, scanned_code=claim.qr_payload)

        claim.refresh_from_db()
        promotion.refresh_from_db()
        assert claim.scanned is False
        assert promotion.pending == 1

    @pytest.mark.parametrize('code', [
        'PROMO-0-unknown:' + str(uuid.UUID(int=1)),
        'PROMO-1:not-a-uuid',
        ':' + str(uuid.UUID(int=1)),
        '   ',
    ])
    def test_invalid_code(self, seller, claim, code):
        with pytest.raises(InvalidCodeError):
            scan_promotion(seller=seller, scanned_code=code)

    def test_bare_unique_code_is_not_a_claim(self, seller, claim, promotion):
        with pytest.raises(NotClaimedError):
            scan_promotion(seller=seller, scanned_code=promotion.unique_code)

    def test_claim_of_another_promotion(self, seller, claim, promotion_factory):
        other = promotion_factory(title='Other deal')
        code = build_qr_payload(other.unique_code, claim.id)

        with pytest.raises(NotClaimedError):
            scan_promotion(seller=seller, scanned_code=code)

    def test_only_sellers_scan(self, consumer, claim):
        with pytest.raises(InsufficientPermissionsError):
            scan_promotion(seller=consumer, scanned_code=claim.qr_payload)


@pytest.mark.django_db
class TestScanCooldown:

    def test_rapid_rescan_blocked(self, seller, claim):
        with pytest.raises(NotClaimedError):
            scan_promotion(seller=seller, scanned_code=claim.promotion.unique_code)

        with pytest.raises(ScanCooldownError) as exc_info:
            scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        assert exc_info.value.retryable is True
        claim.refresh_from_db()
        assert claim.scanned is False

    def test_scan_allowed_after_cooldown(self, seller, claim):
        with pytest.raises(NotClaimedError):
            scan_promotion(seller=seller, scanned_code=claim.promotion.unique_code)
        cache.clear()

        scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        claim.refresh_from_db()
        assert claim.scanned is True

    def test_cooldown_is_per_seller(self, seller, other_seller, claim):
        with pytest.raises(UnauthorizedScanError):
            scan_promotion(seller=other_seller, scanned_code=claim.qr_payload)

        scan_promotion(seller=seller, scanned_code=claim.qr_payload)

        claim.refresh_from_db()
        assert claim.scanned is True


@pytest.mark.django_db
class TestPromotionClaims:

    def test_seller_lists_claims(self, seller, claim, promotion):
        claims = list_promotion_claims(seller=seller, promotion_id=promotion.id)
        assert [c.id for c in claims] == [claim.id]
        assert list_promotion_claims(seller=seller, promotion_id=promotion.id, scanned=True).count() == 0

    def test_other_seller_rejected(self, other_seller, promotion):
        with pytest.raises(UnauthorizedScanError):
            list_promotion_claims(seller=other_seller, promotion_id=promotion.id)

    def test_missing_promotion(self, seller):
        with pytest.raises(PromotionNotFoundError):
            list_promotion_claims(seller=seller, promotion_id=999999)
