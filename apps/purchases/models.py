from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal


class PurchaseHistory(models.Model):
    """One purchased unit of a dish."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='purchases'
    )

    # Null once the dish is removed from the menu
    menu = models.ForeignKey(
        'restaurants.Menu',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )

    # Snapshot at transaction time
    dish_name = models.CharField(max_length=500)
    restaurant_name = models.CharField(max_length=255)
    transaction_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    transaction_date = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'purchase_history'
        ordering = ['-transaction_date', '-id']
        indexes = [
            models.Index(fields=['user', '-transaction_date'], name='purchases_user_date_idx'),
        ]
        verbose_name_plural = 'purchase history'

    def __str__(self):
        return f"{self.dish_name} @ {self.restaurant_name} ({self.transaction_amount})"
