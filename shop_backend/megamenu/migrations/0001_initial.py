import uuid

import django.core.validators
from django.db import migrations, models

import megamenu.models.card


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MegaMenuCard",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("menu_type", models.CharField(choices=[("SHOP", "Shop"), ("ABOUT", "About")], max_length=10)),
                (
                    "position",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(2),
                        ]
                    ),
                ),
                (
                    "image",
                    models.FileField(
                        blank=True,
                        max_length=500,
                        upload_to=megamenu.models.card.megamenu_upload_to,
                    ),
                ),
                ("image_url", models.CharField(max_length=1000)),
                ("link_url", models.CharField(max_length=1000)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["menu_type", "position"],
                "constraints": [
                    models.UniqueConstraint(fields=("menu_type", "position"), name="megamenu_type_pos_uniq"),
                ],
            },
        ),
    ]
