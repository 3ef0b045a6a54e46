# products/models/product.py

import uuid
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .category import Category


def discounted_price(price, discount_percentage) -> Decimal | None:
    """
    price * (1 - discount / 100), rounded to cents.
    None when there is no discount.
    """
    if price is None or not discount_percentage:
        return None
    pct = Decimal(int(discount_percentage))
    value = Decimal(price) * (Decimal("100") - pct) / Decimal("100")
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class Product(models.Model):
    """
    Storefront product.

    PRICING:
    - price is the list price (> 0)
    - discount_percentage (0..100) derives sale_price
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True)

    price = models.DecimalField(max_digits=10, decimal_places=2)
    sale_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    discount_percentage = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )

    image = models.CharField(max_length=1000, blank=True)
    images = models.JSONField(default=list, blank=True)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    subcategories = models.ManyToManyField(
        Category,
        blank=True,
        related_name="subcategory_products",
    )

    featured = models.BooleanField(default=False, db_index=True)
    attributes = models.JSONField(null=True, blank=True)
    showcasing_sections = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "featured"], name="product_category_featured_idx"),
            models.Index(fields=["price"], name="product_price_idx"),
        ]

    def clean(self):
        if self.price is None or self.price <= Decimal("0"):
            raise ValidationError({"price": "Price must be greater than zero"})
        if self.discount_percentage is not None and not 0 <= self.discount_percentage <= 100:
            raise ValidationError({"discount_percentage": "Discount must be between 0 and 100"})

    def apply_discount(self, discount_percentage):
        self.discount_percentage = discount_percentage
        self.sale_price = discounted_price(self.price, discount_percentage)

    def __str__(self):
        return self.name
