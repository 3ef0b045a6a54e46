import uuid

import django.db.models.deletion
from django.db import migrations, models

import gallery.models.item


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="GalleryItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("type", models.CharField(choices=[("FOLDER", "Folder"), ("FILE", "File")], max_length=10)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "file",
                    models.FileField(
                        blank=True,
                        max_length=500,
                        upload_to=gallery.models.item.gallery_upload_to,
                    ),
                ),
                ("url", models.CharField(blank=True, max_length=1000)),
                ("mime_type", models.CharField(blank=True, max_length=255)),
                ("size", models.PositiveBigIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "folder",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"type": "FOLDER"},
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items",
                        to="gallery.galleryitem",
                    ),
                ),
            ],
            options={
                "ordering": ["type", "name"],
                "indexes": [
                    models.Index(fields=["folder", "type"], name="gallery_folder_type_idx"),
                    models.Index(fields=["name"], name="gallery_name_idx"),
                ],
            },
        ),
    ]
