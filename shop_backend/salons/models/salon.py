"""
PATH: salons/models/salon.py

SALON DIRECTORY LISTING

- A customer owns at most one salon (user one-to-one, nullable for listings
  created by staff).
- Listings go through review: PENDING_REVIEW -> APPROVED | REJECTED.
- The public "Find your salon" page only shows active + approved rows.
- image / logo may hold base64 data URLs, so they are TextFields.
"""

import uuid

from django.conf import settings
from django.db import models


class SalonQuerySet(models.QuerySet):
    def public(self):
        return self.filter(is_active=True, status=Salon.Status.APPROVED)

    def directory_order(self):
        return self.order_by("-is_bio_diamond", "city", "name")


class Salon(models.Model):
    class Status(models.TextChoices):
        PENDING_REVIEW = "PENDING_REVIEW", "Pending review"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="salon",
    )

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500)
    city = models.CharField(max_length=120, db_index=True)
    postal_code = models.CharField(max_length=20, null=True, blank=True)

    phone = models.CharField(max_length=50, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    website = models.CharField(max_length=500, null=True, blank=True)

    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    image = models.TextField(null=True, blank=True)
    logo = models.TextField(null=True, blank=True)
    images = models.JSONField(default=list, blank=True)

    description = models.TextField(null=True, blank=True)
    working_hours = models.JSONField(null=True, blank=True)

    is_bio_diamond = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING_REVIEW,
        db_index=True,
    )
    rejection_reason = models.TextField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_salons",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SalonQuerySet.as_manager()

    class Meta:
        ordering = ["-is_bio_diamond", "city", "name"]
        indexes = [
            models.Index(fields=["status", "is_active"], name="salon_status_active_idx"),
        ]

    @property
    def is_public(self) -> bool:
        return self.is_active and self.status == self.Status.APPROVED

    def __str__(self):
        return f"{self.name} ({self.city})"
