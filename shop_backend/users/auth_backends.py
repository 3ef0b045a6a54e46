"""
PATH: users/auth_backends.py

AUTH BACKEND: Email login

Rules:
- The identifier is an email; it is normalized the same way registration
  stores it (trimmed, lower-cased).
- Inactive accounts never authenticate.
- Model permissions (Django admin) still come from ModelBackend.

This is used by Django auth() and DRF flows that call authenticate().
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

from users.models import normalize_email_address

User = get_user_model()


class EmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        # Django admin passes "username"; our API passes email=...
        identifier = normalize_email_address(kwargs.get("email") or username)
        if not identifier or password is None:
            return None

        try:
            user = User.objects.get(email=identifier)
        except User.DoesNotExist:
            # Run the hasher anyway to keep timing flat for unknown emails.
            User().set_password(password)
            return None

        if not user.is_active:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
