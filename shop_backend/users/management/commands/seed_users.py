# users/management/commands/seed_users.py

from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import ROLE_ADMIN, ROLE_CUSTOMER


@dataclass(frozen=True)
class SeedUserSpec:
    label: str
    role: str
    email: str
    name: str
    user_type: str = "customer"


SEED_USERS = [
    SeedUserSpec("Admin", ROLE_ADMIN, "admin@example.com", "Store Admin"),
    SeedUserSpec("Customer", ROLE_CUSTOMER, "customer@example.com", "Demo Customer"),
    SeedUserSpec("Professional", ROLE_CUSTOMER, "pro@example.com", "Demo Nail Pro", "professional"),
]


class Command(BaseCommand):
    help = "Seed demo accounts: one admin, one customer, one professional."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            type=str,
            default="Pass1234!",
            help="Password for seeded users (default: Pass1234!)",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="If set, resets password for existing seeded users too.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options.get("password") or ""
        force_password = bool(options.get("force_password"))

        if len(password) < 6:
            raise CommandError("--password must be at least 6 characters.")

        User = get_user_model()
        created_count = 0

        for seed in SEED_USERS:
            user, created = User.objects.get_or_create(
                email=seed.email,
                defaults={
                    "name": seed.name,
                    "role": seed.role,
                    "user_type": seed.user_type,
                    "is_staff": seed.role == ROLE_ADMIN,
                    "is_superuser": seed.role == ROLE_ADMIN,
                },
            )

            if created or force_password:
                user.set_password(password)
                user.save(update_fields=["password"])

            if created:
                created_count += 1
                self.stdout.write(f"created: {seed.label} <{seed.email}>")
            else:
                self.stdout.write(f"exists:  {seed.label} <{seed.email}>")

        self.stdout.write(self.style.SUCCESS(f"Seeded users. Created: {created_count}"))
