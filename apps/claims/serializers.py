from rest_framework import serializers

from apps.accounts.models import User
from apps.promotions.serializers import PromotionListSerializer

from .models import ClaimedPromotion

CLAIM_STATUS_CHOICES = [
    ('pending', 'Pending'),
    ('claimed', 'Redeemed'),
]


class ClaimSerializer(serializers.ModelSerializer):
    """A consumer's claim with the promotion it belongs to."""

    promotion = PromotionListSerializer(read_only=True)
    qr_payload = serializers.CharField(read_only=True)

    class Meta:
        model = ClaimedPromotion
        fields = [
            'id',
            'promotion',
            'scanned',
            'claimed_at',
            'scanned_at',
            'qr_payload',
        ]
        read_only_fields = fields


class ClaimantSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'name']
        read_only_fields = fields


class PromotionClaimSerializer(serializers.ModelSerializer):
    """Claim as seen by the seller of the promotion."""

    user = ClaimantSerializer(read_only=True)

    class Meta:
        model = ClaimedPromotion
        fields = ['id', 'user', 'scanned', 'claimed_at', 'scanned_at']
        read_only_fields = fields


class ScanSerializer(serializers.Serializer):
    """Raw string read from the consumer's QR code."""

    code = serializers.CharField(required=True, max_length=255, trim_whitespace=True)


class ScanResultSerializer(serializers.ModelSerializer):
    promotion_id = serializers.IntegerField(read_only=True)
    promotion_title = serializers.CharField(source='promotion.title', read_only=True)
    customer = ClaimantSerializer(source='user', read_only=True)

    class Meta:
        model = ClaimedPromotion
        fields = ['id', 'promotion_id', 'promotion_title', 'customer', 'scanned', 'scanned_at']
        read_only_fields = fields


class ClaimListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CLAIM_STATUS_CHOICES, required=False)

    def scanned_filter(self):
        """Map ``status`` to a ``scanned`` filter value (None for all)."""
        status = self.validated_data.get('status')
        if status is None:
            return None
        return status == 'claimed'
