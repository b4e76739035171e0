import pytest
from datetime import date, timedelta
from django.urls import reverse
from rest_framework import status

from apps.promotions.models import Promotion

from .conftest import make_banner


def create_payload(industry, **overrides):
    payload = {
        'title': 'Weekend brunch',
        'description': 'Two plates for one',
        'industry_id': industry.id,
        'quantity': 3,
        'original_price': '20.00',
        'promotional_price': '10.00',
        'start_date': date.today().isoformat(),
        'end_date': (date.today() + timedelta(days=2)).isoformat(),
        'banner': make_banner(),
    }
    payload.update(overrides)
    return payload


# =============================================================================
# List & Retrieve
# =============================================================================

@pytest.mark.django_db
class TestPromotionList:
    """Tests for GET /api/promotions/"""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('promotions:promotion-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_consumer_list(self, consumer_client, promotion, unapproved_promotion):
        response = consumer_client.get(reverse('promotions:promotion-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['has_more'] is False
        item = response.data['results'][0]
        assert item['id'] == promotion.id
        assert item['seller']['business_name'] == 'Corner Bakery'
        assert item['industry']['icon'] == 'restaurant'
        assert item['remaining_quantity'] == 10

    def test_search_and_industry_params(self, consumer_client, technology, promotion_factory):
        promotion_factory(title='Bread')
        laptop = promotion_factory(title='Laptop sale', industry=technology)

        response = consumer_client.get(
            reverse('promotions:promotion-list'),
            {'search': 'laptop', 'industry': technology.id},
        )

        assert [item['id'] for item in response.data['results']] == [laptop.id]

    def test_paging(self, consumer_client, promotion_factory):
        for i in range(11):
            promotion_factory(title=f'Deal {i}')

        response = consumer_client.get(reverse('promotions:promotion-list'), {'page': 1})
        assert len(response.data['results']) == 10
        assert response.data['has_more'] is True

        response = consumer_client.get(reverse('promotions:promotion-list'), {'page': 2})
        assert len(response.data['results']) == 1
        assert response.data['has_more'] is False

    def test_admin_approval_filter(self, admin_client, promotion, unapproved_promotion):
        response = admin_client.get(reverse('promotions:promotion-list'), {'is_approved': 'false'})

        assert [item['id'] for item in response.data['results']] == [unapproved_promotion.id]

    def test_retrieve(self, consumer_client, promotion):
        url = reverse('promotions:promotion-detail', kwargs={'pk': promotion.id})
        response = consumer_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['unique_code'] == promotion.unique_code
        assert response.data['seller']['contact_number'] == ''

    def test_retrieve_unapproved_as_consumer(self, consumer_client, unapproved_promotion):
        url = reverse('promotions:promotion-detail', kwargs={'pk': unapproved_promotion.id})
        response = consumer_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_industries(self, consumer_client, food, technology):
        response = consumer_client.get(reverse('promotions:industries'))

        assert response.status_code == status.HTTP_200_OK
        icons = {item['name']: item['icon'] for item in response.data}
        assert icons['Food'] == 'restaurant'
        assert icons['Technology'] == 'laptop'


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestPromotionCreate:
    """Tests for POST /api/promotions/"""

    def test_seller_creates(self, seller_client, food):
        response = seller_client.post(
            reverse('promotions:promotion-list'),
            create_payload(food),
            format='multipart',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['is_approved'] is False
        assert response.data['used_quantity'] == 0
        assert response.data['unique_code'].startswith('PROMO-')

    def test_consumer_forbidden(self, consumer_client, food):
        response = consumer_client.post(
            reverse('promotions:promotion-list'),
            create_payload(food),
            format='multipart',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'forbidden'
        assert Promotion.objects.count() == 0

    def test_missing_banner(self, seller_client, food):
        payload = create_payload(food)
        payload.pop('banner')
        response = seller_client.post(reverse('promotions:promotion-list'), payload, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'banner' in response.data

    def test_end_before_start(self, seller_client, food):
        payload = create_payload(food, end_date=(date.today() - timedelta(days=1)).isoformat())
        response = seller_client.post(reverse('promotions:promotion-list'), payload, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_industry(self, seller_client, food):
        payload = create_payload(food, industry_id=987654)
        response = seller_client.post(reverse('promotions:promotion-list'), payload, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'


# =============================================================================
# Approve / Update / Delete
# =============================================================================

@pytest.mark.django_db
class TestPromotionActions:

    def test_admin_approve(self, admin_client, unapproved_promotion):
        url = reverse('promotions:promotion-approve', kwargs={'pk': unapproved_promotion.id})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_approved'] is True

    def test_admin_decline(self, admin_client, promotion):
        url = reverse('promotions:promotion-decline', kwargs={'pk': promotion.id})
        response = admin_client.post(url)

        assert response.data['is_approved'] is False

    def test_seller_cannot_approve(self, seller_client, unapproved_promotion):
        url = reverse('promotions:promotion-approve', kwargs={'pk': unapproved_promotion.id})
        response = seller_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_partial_update(self, seller_client, promotion):
        url = reverse('promotions:promotion-detail', kwargs={'pk': promotion.id})
        response = seller_client.patch(url, {'title': 'Updated deal', 'quantity': 15}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Updated deal'
        assert response.data['quantity'] == 15

    def test_non_owner_update(self, other_seller_client, promotion):
        url = reverse('promotions:promotion-detail', kwargs={'pk': promotion.id})
        response = other_seller_client.patch(url, {'title': 'Nope'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_delete(self, seller_client, promotion):
        url = reverse('promotions:promotion-detail', kwargs={'pk': promotion.id})
        response = seller_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Promotion.objects.filter(id=promotion.id).exists()

    def test_non_owner_delete(self, other_seller_client, promotion):
        url = reverse('promotions:promotion-detail', kwargs={'pk': promotion.id})
        response = other_seller_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
