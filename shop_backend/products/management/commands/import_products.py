# products/management/commands/import_products.py

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from products.services.transfer import MODE_SKIP, MODE_UPDATE, import_payload


class Command(BaseCommand):
    help = "Import products and categories from an export_products JSON file."

    def add_arguments(self, parser):
        parser.add_argument("path", type=str)
        parser.add_argument(
            "--update-existing",
            action="store_true",
            help="Overwrite products whose id already exists (default: skip them).",
        )

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"Import file not found: {path}")

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}") from exc

        mode = MODE_UPDATE if options.get("update_existing") else MODE_SKIP
        try:
            stats = import_payload(payload, mode=mode)
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            f"Categories: {stats.categories_created} created, {stats.categories_skipped} skipped"
        )
        self.stdout.write(
            f"Products:   {stats.products_created} created, {stats.products_updated} updated, "
            f"{stats.products_skipped} skipped, {stats.products_errored} failed"
        )

        style = self.style.WARNING if stats.products_errored else self.style.SUCCESS
        self.stdout.write(style("Import finished."))
