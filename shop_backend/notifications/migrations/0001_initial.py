import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("SYSTEM", "System"),
                            ("NEW_CUSTOMER", "New customer"),
                            ("NEW_PROFESSIONAL_CERTIFICATION", "New professional certification"),
                            ("SALON_APPROVED", "Salon approved"),
                            ("SALON_REJECTED", "Salon rejected"),
                            ("CHAT_MESSAGE", "Chat message"),
                        ],
                        db_index=True,
                        max_length=40,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField()),
                ("image", models.CharField(blank=True, max_length=1000)),
                ("link_url", models.CharField(blank=True, max_length=1000)),
                ("metadata", models.JSONField(blank=True, null=True)),
                ("read", models.BooleanField(default=False)),
                ("is_scheduled", models.BooleanField(default=False)),
                ("scheduled_for", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "read"], name="notif_user_read_idx"),
                    models.Index(fields=["type", "created_at"], name="notif_type_created_idx"),
                ],
            },
        ),
    ]
