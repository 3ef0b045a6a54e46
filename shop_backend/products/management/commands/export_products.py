# products/management/commands/export_products.py

from __future__ import annotations

import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from products.services.transfer import build_export_payload


class Command(BaseCommand):
    help = "Export every product (with its categories) to a JSON file."

    def add_arguments(self, parser):
        parser.add_argument(
            "--output",
            type=str,
            default=None,
            help="File to write. Defaults to <BASE_DIR>/exports/products-export-<timestamp>.json",
        )

    def handle(self, *args, **options):
        payload = build_export_payload()

        if not payload["products"]:
            self.stdout.write(self.style.WARNING("No products found to export."))
            return

        output = options.get("output")
        if output:
            path = Path(output)
        else:
            stamp = timezone.now().strftime("%Y-%m-%d_%H-%M-%S")
            path = Path(settings.BASE_DIR) / "exports" / f"products-export-{stamp}.json"

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, cls=DjangoJSONEncoder), encoding="utf-8")

        subcategory_links = sum(len(p["subcategoryIds"]) for p in payload["products"])
        self.stdout.write(self.style.SUCCESS(f"Export written to {path}"))
        self.stdout.write(f"  Products:   {len(payload['products'])}")
        self.stdout.write(f"  Categories: {len(payload['categories'])}")
        self.stdout.write(f"  Subcategory links: {subcategory_links}")
