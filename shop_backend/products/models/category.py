# products/models/category.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.text import slugify


def normalize_slug(value) -> str:
    return slugify(str(value or "").strip()).lower()


class Category(models.Model):
    """
    Catalog category.

    A category with a parent is a subcategory; products keep one primary
    category plus any number of subcategories.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True)
    image = models.CharField(max_length=1000, blank=True)
    icon = models.CharField(max_length=255, blank=True)

    parent = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="subcategories",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def clean(self):
        self.slug = normalize_slug(self.slug)
        if not self.slug:
            raise ValidationError({"slug": "Slug is required"})
        if self.parent_id and self.parent_id == self.id:
            raise ValidationError({"parent": "A category cannot be its own parent"})

    def save(self, *args, **kwargs):
        self.slug = normalize_slug(self.slug)
        super().save(*args, **kwargs)

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None

    def __str__(self):
        return self.name
