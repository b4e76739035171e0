import pytest
from django.urls import reverse
from rest_framework import status

from apps.claims.models import ClaimedPromotion


# =============================================================================
# Claiming
# =============================================================================

@pytest.mark.django_db
class TestClaimEndpoint:
    """Tests for POST /api/claims/promotions/{id}/claim/"""

    def url(self, promotion_id):
        return reverse('claims:claim-promotion', kwargs={'promotion_id': promotion_id})

    def test_requires_authentication(self, api_client, promotion):
        response = api_client.post(self.url(promotion.id))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_claim(self, consumer_client, promotion):
        response = consumer_client.post(self.url(promotion.id))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['scanned'] is False
        assert response.data['promotion']['id'] == promotion.id
        assert response.data['qr_payload'] == f"{promotion.unique_code}:{response.data['id']}"

    def test_claim_twice(self, consumer_client, promotion):
        consumer_client.post(self.url(promotion.id))
        response = consumer_client.post(self.url(promotion.id))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'already_claimed'
        assert response.data['retryable'] is False

    def test_sold_out(self, consumer_client, promotion_factory):
        promotion = promotion_factory(quantity=1, pending=1)

        response = consumer_client.post(self.url(promotion.id))

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'sold_out'

    def test_missing_promotion(self, consumer_client):
        response = consumer_client.post(self.url(999999))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_seller_cannot_claim(self, seller_client, promotion):
        response = seller_client.post(self.url(promotion.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'forbidden'


@pytest.mark.django_db
class TestMyClaims:
    """Tests for GET /api/claims/mine/"""

    def test_status_filter(self, consumer_client, claim, promotion_factory):
        other = promotion_factory(title='Redeemed deal')
        redeemed = ClaimedPromotion.objects.create(user=claim.user, promotion=other, scanned=True)

        pending = consumer_client.get(reverse('claims:my-claims'), {'status': 'pending'})
        claimed = consumer_client.get(reverse('claims:my-claims'), {'status': 'claimed'})
        every = consumer_client.get(reverse('claims:my-claims'))

        assert [c['id'] for c in pending.data] == [str(claim.id)]
        assert [c['id'] for c in claimed.data] == [str(redeemed.id)]
        assert len(every.data) == 2

    def test_invalid_status(self, consumer_client):
        response = consumer_client.get(reverse('claims:my-claims'), {'status': 'lost'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestClaimQr:
    """Tests for GET /api/claims/{id}/qr/"""

    def test_png(self, consumer_client, claim):
        response = consumer_client.get(reverse('claims:claim-qr', kwargs={'pk': claim.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'image/png'
        assert response.content.startswith(b'\x89PNG')

    def test_json_payload(self, consumer_client, claim):
        response = consumer_client.get(
            reverse('claims:claim-qr', kwargs={'pk': claim.id}), {'output': 'json'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payload'] == claim.qr_payload

    def test_other_users_claim(self, seller_client, claim):
        response = seller_client.get(reverse('claims:claim-qr', kwargs={'pk': claim.id}))
        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Scanning
# =============================================================================

@pytest.mark.django_db
class TestScanEndpoint:
    """Tests for POST /api/claims/scan/"""

    def test_scan(self, seller_client, claim, consumer):
        response = seller_client.post(
            reverse('claims:scan'), {'code': claim.qr_payload}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['scanned'] is True
        assert response.data['customer']['email'] == consumer.email
        claim.promotion.refresh_from_db()
        assert claim.promotion.pending == 0
        assert claim.promotion.used_quantity == 1

    def test_cooldown(self, seller_client, claim):
        seller_client.post(reverse('claims:scan'), {'code': 'garbage'}, format='json')
        response = seller_client.post(
            reverse('claims:scan'), {'code': claim.qr_payload}, format='json'
        )

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data['code'] == 'scan_cooldown'
        assert response.data['retryable'] is True

    def test_wrong_seller(self, other_seller_client, claim):
        response = other_seller_client.post(
            reverse('claims:scan'), {'code': claim.qr_payload}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'unauthorized'

    def test_invalid_code(self, seller_client, claim):
        response = seller_client.post(reverse('claims:scan'), {'code': 'garbage'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_code'

    def test_bare_unique_code(self, seller_client, claim):
        response = seller_client.post(
            reverse('claims:scan'), {'code': claim.promotion.unique_code}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_claimed'
        claim.refresh_from_db()
        assert claim.scanned is False

    def test_schema_names_the_payload_format(self, api_client):
        response = api_client.get(reverse('api-schema'), {'format': 'json'})

        assert response.status_code == status.HTTP_200_OK
        description = response.data['paths']['/api/claims/scan/']['post']['description']
        assert '<unique_code>:<claim id>' in description
        assert 'not_claimed' in description

    def test_missing_code(self, seller_client):
        response = seller_client.post(reverse('claims:scan'), {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_consumer_cannot_scan(self, consumer_client, claim):
        response = consumer_client.post(
            reverse('claims:scan'), {'code': claim.qr_payload}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'forbidden'


@pytest.mark.django_db
class TestPromotionClaimsEndpoint:
    """Tests for GET /api/claims/promotions/{id}/"""

    def test_seller_sees_claims(self, seller_client, claim, promotion):
        response = seller_client.get(
            reverse('claims:promotion-claims', kwargs={'promotion_id': promotion.id})
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['id'] == str(claim.id)
        assert response.data[0]['user']['email'] == 'consumer@example.com'

    def test_consumer_forbidden(self, consumer_client, promotion):
        response = consumer_client.get(
            reverse('claims:promotion-claims', kwargs={'promotion_id': promotion.id})
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_other_seller(self, other_seller_client, promotion):
        response = other_seller_client.get(
            reverse('claims:promotion-claims', kwargs={'promotion_id': promotion.id})
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'unauthorized'
