from django.conf import settings
from rest_framework import serializers

from .models import Role, User


class UserSerializer(serializers.ModelSerializer):
    """User profile including role and seller business fields."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'role',
            'status',
            'name',
            'contact_number',
            'business_name',
            'business_logo',
            'latitude',
            'longitude',
            'display_name',
            'email_verified',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserPublicSerializer(serializers.ModelSerializer):
    """Seller contact info shown next to a promotion."""

    class Meta:
        model = User
        fields = ['id', 'business_name', 'business_logo', 'contact_number', 'latitude', 'longitude']
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for consumer sign-up."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        min_length=settings.MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    name = serializers.CharField(required=False, allow_blank=True, max_length=100)
    contact_number = serializers.CharField(required=False, allow_blank=True, max_length=32)

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class EmailSerializer(serializers.Serializer):
    """Email-only payload (resend code, password reset request)."""

    email = serializers.EmailField(required=True)


class EmailCodeSerializer(serializers.Serializer):
    """Email plus the one-time code received by email."""

    email = serializers.EmailField(required=True)
    code = serializers.CharField(required=True, max_length=12)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Serializer for setting the new password."""

    email = serializers.EmailField(required=True)
    token = serializers.CharField(required=True)
    new_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Profile fields a user can edit.

    Which of them are applied depends on the user's role.
    """

    name = serializers.CharField(required=False, allow_blank=True, max_length=100)
    contact_number = serializers.CharField(required=False, allow_blank=True, max_length=32)
    business_name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    latitude = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True,
        min_value=-90, max_value=90
    )
    longitude = serializers.DecimalField(
        max_digits=9, decimal_places=6, required=False, allow_null=True,
        min_value=-180, max_value=180
    )


class LogoUploadSerializer(serializers.Serializer):
    logo = serializers.ImageField(required=True)


class UpdateUserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices)


class RouteQuerySerializer(serializers.Serializer):
    segment = serializers.CharField(required=False, allow_blank=True, default='')
