"""
PATH: users/models/user.py

CUSTOM USER MODEL

- Email is the only login identifier; it is stored trimmed + lower-cased so
  lookups, uniqueness and the banned-email list all agree.
- role drives the admin console (admin) vs storefront (customer) split.
- permissions holds per-user capability overrides: {"<cap>": "allow"|"deny"}.
- user_type separates shoppers from nail professionals (who may upload a
  certificate at signup).
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_CHOICES, ROLE_CUSTOMER, clean_overrides


def normalize_email_address(value) -> str:
    return str(value or "").strip().lower()


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email=None, password=None, **extra_fields):
        email = normalize_email_address(email)
        if not email:
            raise ValueError("Email is required")

        extra_fields.setdefault("role", ROLE_CUSTOMER)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    class UserType(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        PROFESSIONAL = "professional", "Professional"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER, db_index=True)
    user_type = models.CharField(
        max_length=20,
        choices=UserType.choices,
        default=UserType.CUSTOMER,
    )

    permissions = models.JSONField(default=dict, blank=True)

    # professionals may attach a certificate at signup (URL or data URI)
    certificate_url = models.TextField(blank=True)

    image = models.CharField(max_length=1000, blank=True)
    shipping_address = models.TextField(blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        self.email = normalize_email_address(self.email)
        if not self.email:
            raise ValidationError("User must have an email")
        try:
            self.permissions = clean_overrides(self.permissions)
        except ValueError as exc:
            raise ValidationError({"permissions": str(exc)})

    def save(self, *args, **kwargs):
        self.email = normalize_email_address(self.email)
        super().save(*args, **kwargs)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __str__(self):
        return f"{self.email} ({self.role})"
