# common/management/commands/dump_rows.py

from __future__ import annotations

from pathlib import Path

from django.apps import apps
from django.core import serializers
from django.core.management.base import BaseCommand, CommandError

DEFAULT_LIMIT = 20


class Command(BaseCommand):
    help = "Dump rows of one model as JSON (debugging aid). Example: dump_rows salons.Salon --limit 5"

    def add_arguments(self, parser):
        parser.add_argument("model", type=str, help="<app_label>.<ModelName>, e.g. products.Product")
        parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="Max rows (0 = all)")
        parser.add_argument("--output", type=str, default=None, help="Write to this file instead of stdout")

    def handle(self, *args, **options):
        label = options["model"]
        try:
            model = apps.get_model(label)
        except (LookupError, ValueError):
            raise CommandError(f"Unknown model '{label}'. Use <app_label>.<ModelName>.")

        limit = options["limit"]
        if limit < 0:
            raise CommandError("--limit must be 0 or a positive number")

        qs = model._default_manager.order_by("pk")
        if limit:
            qs = qs[:limit]

        rows = list(qs)
        payload = serializers.serialize("json", rows, indent=2)

        output = options.get("output")
        if not output:
            self.stdout.write(payload)
            return

        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
        self.stdout.write(self.style.SUCCESS(f"Wrote {len(rows)} {model._meta.label} row(s) to {path}"))
