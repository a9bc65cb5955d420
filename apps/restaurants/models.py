from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal


class Restaurant(models.Model):
    """Restaurant selling dishes on the marketplace."""

    name = models.CharField(max_length=255, unique=True)
    cash_balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
    )

    # e.g. "Mon-Fri 11 am - 9:30 pm / Sat, Sun 10 am - 1 am"
    opening_hours = models.CharField(max_length=500, blank=True)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='restaurants'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'restaurants'
        indexes = [
            models.Index(fields=['owner'], name='restaurants_owner_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def is_owned_by(self, user):
        return user is not None and self.owner_id == user.pk


class Menu(models.Model):
    """Dish offered by a restaurant."""

    restaurant = models.ForeignKey(
        Restaurant,
        on_delete=models.CASCADE,
        related_name='menus'
    )
    dish_name = models.CharField(max_length=500)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menus'
        constraints = [
            models.UniqueConstraint(
                fields=['restaurant', 'dish_name'],
                name='unique_dish_per_restaurant',
            ),
        ]
        indexes = [
            models.Index(fields=['restaurant', 'price'], name='menus_restaurant_price_idx'),
        ]
        ordering = ['dish_name']

    def __str__(self):
        return f"{self.restaurant.name} - {self.dish_name}"
