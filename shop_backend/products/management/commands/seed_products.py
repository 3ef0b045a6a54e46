# products/management/commands/seed_products.py

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Category, Product, discounted_price


class Command(BaseCommand):
    help = "Seed demo categories, subcategories and products"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        # -------------------------------
        # CATEGORIES
        # -------------------------------
        categories = {
            "gel-polish": ("Gel Polish", None),
            "nail-care": ("Nail Care", None),
            "tools": ("Tools", None),
            "gel-polish-classic": ("Classic Colors", "gel-polish"),
            "gel-polish-glitter": ("Glitter", "gel-polish"),
        }

        category_objs = {}
        for slug, (name, parent_slug) in categories.items():
            obj, _ = Category.objects.get_or_create(
                slug=slug,
                defaults={"name": name, "parent": category_objs.get(parent_slug)},
            )
            category_objs[slug] = obj

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        products_data = [
            ("Gel Polish Cherry Red", "gel-polish", ["gel-polish-classic"], "14.90", None, True),
            ("Gel Polish Star Dust", "gel-polish", ["gel-polish-glitter"], "16.90", 10, False),
            ("Cuticle Oil Almond", "nail-care", [], "9.50", None, True),
            ("Nail File 180/240", "tools", [], "3.20", 20, False),
        ]

        created = 0
        for name, cat, subs, price, discount, featured in products_data:
            price = Decimal(price)
            product, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "category": category_objs[cat],
                    "price": price,
                    "discount_percentage": discount,
                    "sale_price": discounted_price(price, discount),
                    "featured": featured,
                },
            )
            if was_created:
                product.subcategories.set([category_objs[s] for s in subs])
                created += 1

        self.stdout.write(
            self.style.SUCCESS(f"Catalog seeded ({created} new products).")
        )
