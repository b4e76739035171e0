from django.db import models
from django.db.models import F, Q
from django.core.validators import MinValueValidator
from decimal import Decimal
import secrets
import string
import time

from .icons import icon_for_industry


UNIQUE_CODE_PREFIX = 'PROMO'
UNIQUE_CODE_SUFFIX_LENGTH = 6
UNIQUE_CODE_ALPHABET = string.ascii_lowercase + string.digits


def generate_unique_code():
    """PROMO-<epoch ms>-<random suffix>."""
    suffix = ''.join(
        secrets.choice(UNIQUE_CODE_ALPHABET) for _ in range(UNIQUE_CODE_SUFFIX_LENGTH)
    )
    return f"{UNIQUE_CODE_PREFIX}-{int(time.time() * 1000)}-{suffix}"


class Industry(models.Model):
    """Reference list of business categories."""

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = 'industries'
        ordering = ['name']
        verbose_name_plural = 'industries'

    def __str__(self):
        return self.name

    @property
    def icon(self):
        return icon_for_industry(self.name)


class PromotionQuerySet(models.QuerySet):

    def approved(self):
        return self.filter(is_approved=True)

    def available(self):
        """Approved promotions with at least one unit neither redeemed nor reserved."""
        return self.approved().filter(used_quantity__lt=F('quantity') - F('pending'))


class Promotion(models.Model):
    """
    A seller's discount offer.

    Inventory counters, disjoint, with ``used_quantity + pending <= quantity``:
    - ``used_quantity``: units redeemed at the store
    - ``pending``: units claimed by a consumer and not yet redeemed
    """

    title = models.CharField(max_length=200)
    description = models.TextField()
    start_date = models.DateField()
    end_date = models.DateField()
    banner_url = models.CharField(max_length=500)

    seller = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='promotions'
    )
    industry = models.ForeignKey(
        Industry,
        on_delete=models.PROTECT,
        related_name='promotions'
    )

    is_approved = models.BooleanField(default=False, db_index=True)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    used_quantity = models.PositiveIntegerField(default=0)
    pending = models.PositiveIntegerField(default=0)
    unique_code = models.CharField(max_length=64, unique=True, default=generate_unique_code)

    original_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    promotional_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PromotionQuerySet.as_manager()

    class Meta:
        db_table = 'promotions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_approved', 'created_at'], name='promotions_approved_idx'),
            models.Index(fields=['seller', 'created_at'], name='promotions_seller_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                check=Q(quantity__gte=1),
                name='promotion_quantity_positive'
            ),
            models.CheckConstraint(
                check=Q(used_quantity__lte=F('quantity')),
                name='promotion_used_lte_quantity'
            ),
            models.CheckConstraint(
                check=Q(used_quantity__lte=F('quantity') - F('pending')),
                name='promotion_used_plus_pending_lte_quantity'
            ),
            models.CheckConstraint(
                check=Q(start_date__lte=F('end_date')),
                name='promotion_start_before_end'
            ),
            models.CheckConstraint(
                check=Q(promotional_price__gt=0),
                name='promotion_price_positive'
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.unique_code})"

    @property
    def remaining_quantity(self):
        return self.quantity - self.used_quantity - self.pending

    @property
    def is_sold_out(self):
        return self.used_quantity + self.pending >= self.quantity

    @property
    def discount_percentage(self):
        """Percentage off the original price, or None if unknown."""
        if not self.original_price or self.original_price <= 0:
            return None
        saved = self.original_price - self.promotional_price
        return (saved / self.original_price * 100).quantize(Decimal('0.01'))
