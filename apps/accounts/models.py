from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.contrib.auth.hashers import make_password, check_password
from django.db import models
from django.utils import timezone
import uuid


class Role(models.TextChoices):
    USER = 'user', 'User'
    SELLER = 'seller', 'Seller'
    ADMIN = 'admin', 'Admin'


class AccountStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACTIVE = 'active', 'Active'


class CodePurpose(models.TextChoices):
    SIGNUP = 'signup', 'Email confirmation'
    RECOVERY = 'recovery', 'Password recovery'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('email_verified', True)
        extra_fields.setdefault('status', AccountStatus.ACTIVE)
        extra_fields.setdefault('role', Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Marketplace identity: consumer, seller or admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)
    status = models.CharField(
        max_length=10,
        choices=AccountStatus.choices,
        default=AccountStatus.PENDING
    )

    # Profile
    name = models.CharField(max_length=100, blank=True)
    contact_number = models.CharField(max_length=32, blank=True)

    # Seller business profile
    business_name = models.CharField(max_length=200, blank=True)
    business_logo = models.CharField(max_length=500, blank=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    # One-time codes (hashed, single active code per user)
    email_verified = models.BooleanField(default=False)
    otp_hash = models.CharField(max_length=128, blank=True)
    otp_purpose = models.CharField(max_length=10, choices=CodePurpose.choices, blank=True)
    otp_expires_at = models.DateTimeField(null=True, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['role', 'created_at'], name='users_role_c3b0b5_idx'),
            models.Index(fields=['created_at'], name='users_created_6541e5_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return business name, name or email prefix."""
        return self.business_name or self.name or self.email.split('@')[0]

    @property
    def is_seller(self):
        return self.role == Role.SELLER

    @property
    def is_marketplace_admin(self):
        return self.role == Role.ADMIN

    def set_one_time_code(self, code, purpose, expires_at):
        """Store a hashed one-time code. Caller saves."""
        self.otp_hash = make_password(code)
        self.otp_purpose = purpose
        self.otp_expires_at = expires_at

    def check_one_time_code(self, code, purpose):
        """Return True if ``code`` matches the active code for ``purpose``."""
        if not self.otp_hash or self.otp_purpose != purpose:
            return False
        if self.otp_expires_at is None or self.otp_expires_at < timezone.now():
            return False
        return check_password(code, self.otp_hash)

    def clear_one_time_code(self):
        self.otp_hash = ''
        self.otp_purpose = ''
        self.otp_expires_at = None
