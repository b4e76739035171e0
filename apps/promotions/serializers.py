from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer

from .models import Industry, Promotion


class IndustrySerializer(serializers.ModelSerializer):
    icon = serializers.CharField(read_only=True)

    class Meta:
        model = Industry
        fields = ['id', 'name', 'icon']
        read_only_fields = fields


class PromotionSerializer(serializers.ModelSerializer):
    """Promotion with seller contact, industry and inventory."""

    seller = UserPublicSerializer(read_only=True)
    industry = IndustrySerializer(read_only=True)
    remaining_quantity = serializers.IntegerField(read_only=True)
    is_sold_out = serializers.BooleanField(read_only=True)
    discount_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, read_only=True, allow_null=True
    )

    class Meta:
        model = Promotion
        fields = [
            'id',
            'title',
            'description',
            'start_date',
            'end_date',
            'banner_url',
            'seller',
            'industry',
            'is_approved',
            'quantity',
            'used_quantity',
            'pending',
            'remaining_quantity',
            'is_sold_out',
            'unique_code',
            'original_price',
            'promotional_price',
            'discount_percentage',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PromotionListSerializer(PromotionSerializer):
    """Lighter serializer for list views."""

    class Meta(PromotionSerializer.Meta):
        fields = [
            'id',
            'title',
            'description',
            'start_date',
            'end_date',
            'banner_url',
            'seller',
            'industry',
            'is_approved',
            'quantity',
            'used_quantity',
            'remaining_quantity',
            'is_sold_out',
            'original_price',
            'promotional_price',
            'discount_percentage',
            'created_at',
        ]
        read_only_fields = fields


class PromotionCreateSerializer(serializers.Serializer):
    """Input for creating a promotion (multipart, with banner)."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    industry_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    original_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    promotional_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    banner = serializers.ImageField()

    def validate(self, attrs):
        if attrs['start_date'] > attrs['end_date']:
            raise serializers.ValidationError({
                'end_date': 'End date must be on or after start date'
            })
        return attrs


class PromotionUpdateSerializer(serializers.Serializer):
    """Input for updating a promotion; every field is optional."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False)
    industry_id = serializers.IntegerField(required=False)
    quantity = serializers.IntegerField(min_value=1, required=False)
    original_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    promotional_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    banner = serializers.ImageField(required=False)


class PromotionListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    search = serializers.CharField(required=False, allow_blank=True, default='')
    industry = serializers.IntegerField(required=False)
    is_approved = serializers.BooleanField(required=False, allow_null=True, default=None)
