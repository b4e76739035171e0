from django.db import models
from decimal import Decimal


class UserAnalytics(models.Model):
    """Running totals of a consumer's claims."""

    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='analytics'
    )
    items_bought = models.PositiveIntegerField(default=0)
    money_saved = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    money_spent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_analytics'
        verbose_name_plural = 'user analytics'

    def __str__(self):
        return f"Analytics for {self.user_id}"
