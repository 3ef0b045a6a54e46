# users/management/commands/ensure_superuser.py

"""
PATH: users/management/commands/ensure_superuser.py

Production-safe superuser bootstrap.

- Reads AUTO_ADMIN_EMAIL + AUTO_ADMIN_PASSWORD from env.
- Idempotent: creates the admin if missing; re-promotes + resets password if present.
- Does NOT print the password.
"""

from __future__ import annotations

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from permissions.roles import ROLE_ADMIN
from users.models import normalize_email_address


class Command(BaseCommand):
    help = "Create/update the initial admin account from env vars (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", type=str, default=None, help="Overrides AUTO_ADMIN_EMAIL")
        parser.add_argument("--name", type=str, default="Administrator")

    def handle(self, *args, **options):
        email = normalize_email_address(options.get("email") or os.environ.get("AUTO_ADMIN_EMAIL"))
        password = (os.environ.get("AUTO_ADMIN_PASSWORD") or "").strip()

        if not email or not password:
            self.stdout.write(self.style.WARNING("AUTO_ADMIN_* env vars not set. Skipping."))
            return

        User = get_user_model()

        with transaction.atomic():
            user = User.objects.filter(email=email).first()

            if user:
                user.role = ROLE_ADMIN
                user.is_active = True
                user.is_staff = True
                user.is_superuser = True
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Superuser ensured: {email} (updated)"))
                return

            User.objects.create_superuser(email=email, password=password, name=options["name"])
            self.stdout.write(self.style.SUCCESS(f"Superuser ensured: {email} (created)"))
