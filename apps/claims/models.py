from django.db import models
import uuid


class ClaimedPromotion(models.Model):
    """
    A consumer's claim on one unit of a promotion.

    Lifecycle: claimed (``scanned=False``) -> redeemed (``scanned=True``).
    Redemption is terminal.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    promotion = models.ForeignKey(
        'promotions.Promotion',
        on_delete=models.CASCADE,
        related_name='claims'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='claimed_promotions'
    )
    scanned = models.BooleanField(default=False)
    claimed_at = models.DateTimeField(auto_now_add=True)
    scanned_at = models.DateTimeField(null=True, blank=True)
    scanned_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='scanned_claims'
    )

    class Meta:
        db_table = 'claimed_promotions'
        ordering = ['-claimed_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'promotion'],
                name='unique_claim_per_user_promotion'
            ),
        ]
        indexes = [
            models.Index(fields=['user', 'scanned'], name='claims_user_scanned_idx'),
        ]

    def __str__(self):
        state = 'redeemed' if self.scanned else 'claimed'
        return f"{self.user_id} -> {self.promotion_id} ({state})"

    @property
    def qr_payload(self):
        """String encoded in the consumer's QR code."""
        from .qr import build_qr_payload
        return build_qr_payload(self.promotion.unique_code, self.id)
