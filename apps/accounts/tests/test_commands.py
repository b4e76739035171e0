import pytest
from io import StringIO
from django.core.management import call_command

from apps.accounts.models import Role, User
from apps.claims.models import ClaimedPromotion
from apps.promotions.models import Industry, Promotion


@pytest.mark.django_db
class TestCreateSampleData:

    def test_industries_only(self):
        call_command('create_sample_data', '--industries-only', stdout=StringIO())

        assert Industry.objects.count() == 16
        assert not Promotion.objects.exists()

    def test_full_sample(self):
        call_command('create_sample_data', stdout=StringIO())

        assert User.objects.filter(role=Role.SELLER).count() == 2
        assert Promotion.objects.filter(is_approved=False).count() == 2
        assert ClaimedPromotion.objects.count() == 4
        assert ClaimedPromotion.objects.filter(scanned=True).count() == 1

    def test_rerun_keeps_counters_consistent(self):
        call_command('create_sample_data', stdout=StringIO())
        call_command('create_sample_data', stdout=StringIO())

        assert ClaimedPromotion.objects.count() == 4
        for promotion in Promotion.objects.all():
            claims = promotion.claims.all()
            assert promotion.used_quantity == claims.filter(scanned=True).count()
            assert promotion.pending == claims.filter(scanned=False).count()
