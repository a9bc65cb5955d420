from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal


class UserManager(BaseUserManager):
    """Custom user manager for name-based authentication."""

    def create_user(self, name, password=None, **extra_fields):
        if not name:
            raise ValueError('Name is required')

        email = extra_fields.pop('email', None)
        if email:
            email = self.normalize_email(email)

        user = self.model(name=name, email=email or None, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):
    """Marketplace user: buyer and, optionally, restaurant owner."""

    name = models.CharField(max_length=150, unique=True)
    email = models.EmailField(max_length=255, null=True, blank=True)

    # Spending money for purchases
    cash_balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = 'name'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]

    def __str__(self):
        return self.name
