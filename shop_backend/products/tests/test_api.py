# products/tests/test_api.py

"""
CATALOG API TESTS

Run with:
    python manage.py test products -v 2
"""

import json
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from audit.models import AdminLog
from products.models import Category, Product

User = get_user_model()


class ProductListApiTests(TestCase):
    """
    GUARANTEES:
    - Bare list without page/limit, {products, pagination} with them
    - Filters and sort options narrow / order the list
    """

    def setUp(self):
        self.client = APIClient()
        self.polish = Category.objects.create(name="Gel Polish", slug="gel-polish")

        self.cheap = Product.objects.create(name="Buffer", price=Decimal("2.00"))
        self.mid = Product.objects.create(
            name="Almond Oil", price=Decimal("9.50"), description="Cuticle care", featured=True
        )
        self.pricey = Product.objects.create(name="Cherry Red", price=Decimal("14.90"), category=self.polish)

        # deterministic creation order
        base = timezone.now()
        for offset, product in enumerate([self.cheap, self.mid, self.pricey]):
            Product.objects.filter(pk=product.pk).update(created_at=base + timedelta(minutes=offset))

    def test_bare_list_without_pagination_params(self):
        res = self.client.get("/api/products/")
        self.assertEqual(res.status_code, 200)
        self.assertIsInstance(res.data, list)
        # newest first by default
        self.assertEqual(res.data[0]["id"], str(self.pricey.id))

    def test_paginated_list(self):
        res = self.client.get("/api/products/", {"page": 2, "limit": 2})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["products"]), 1)
        self.assertEqual(
            res.data["pagination"],
            {
                "page": 2,
                "limit": 2,
                "total": 3,
                "totalPages": 2,
                "hasNextPage": False,
                "hasPreviousPage": True,
            },
        )

    def test_default_page_size_is_twelve(self):
        res = self.client.get("/api/products/", {"page": 1})
        self.assertEqual(res.data["pagination"]["limit"], 12)

    def test_filters(self):
        res = self.client.get("/api/products/", {"categoryId": str(self.polish.id)})
        self.assertEqual([p["name"] for p in res.data], ["Cherry Red"])

        res = self.client.get("/api/products/", {"search": "CUTICLE"})
        self.assertEqual([p["name"] for p in res.data], ["Almond Oil"])

        res = self.client.get("/api/products/", {"featured": "true"})
        self.assertEqual([p["name"] for p in res.data], ["Almond Oil"])

        res = self.client.get("/api/products/", {"minPrice": "5", "maxPrice": "10"})
        self.assertEqual([p["name"] for p in res.data], ["Almond Oil"])

    def test_sorting(self):
        res = self.client.get("/api/products/", {"sortBy": "price-asc"})
        self.assertEqual([p["name"] for p in res.data], ["Buffer", "Almond Oil", "Cherry Red"])

        res = self.client.get("/api/products/", {"sortBy": "name-desc"})
        self.assertEqual([p["name"] for p in res.data], ["Cherry Red", "Buffer", "Almond Oil"])

        res = self.client.get("/api/products/", {"sortBy": "oldest"})
        self.assertEqual(res.data[0]["name"], "Buffer")

    def test_related(self):
        res = self.client.get(f"/api/products/{self.pricey.id}/related/")
        self.assertEqual(res.status_code, 200)
        # no other polish products: featured products fill in
        self.assertEqual([p["name"] for p in res.data], ["Almond Oil"])


class ProductAdminApiTests(TestCase):
    """
    GUARANTEES:
    - Admin CRUD, duplicate, bulk edit and export work and are audit-logged
    - Bulk edits reject unknown categories (404) and empty updates (400)
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")
        self.client.force_authenticate(self.admin)

        self.polish = Category.objects.create(name="Gel Polish", slug="gel-polish")
        self.glitter = Category.objects.create(name="Glitter", slug="glitter", parent=self.polish)
        self.product = Product.objects.create(name="Cherry Red", price=Decimal("14.90"), featured=True)

    def test_create_product(self):
        res = self.client.post(
            "/api/products/",
            {
                "name": "Star Dust",
                "price": "16.90",
                "categoryId": str(self.polish.id),
                "subcategoryIds": [str(self.glitter.id)],
                "discountPercentage": 10,
                "attributes": {},
            },
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["category"]["slug"], "gel-polish")
        self.assertEqual(res.data["salePrice"], "15.21")
        self.assertIsNone(res.data["attributes"])
        self.assertEqual(len(res.data["subcategories"]), 1)
        self.assertTrue(AdminLog.objects.filter(resource_type="Product", action_type="CREATE").exists())

    def test_create_requires_positive_price(self):
        res = self.client.post("/api/products/", {"name": "Free", "price": "0"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertIn("price", res.data)

    def test_patch_clears_category(self):
        self.product.category = self.polish
        self.product.save()

        res = self.client.patch(f"/api/products/{self.product.id}/", {"categoryId": ""}, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertIsNone(res.data["categoryId"])

    def test_delete_product(self):
        res = self.client.delete(f"/api/products/{self.product.id}/")
        self.assertEqual(res.status_code, 200)
        self.assertFalse(Product.objects.exists())

    def test_duplicate(self):
        res = self.client.post(f"/api/products/{self.product.id}/duplicate/")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["name"], "Copy of Cherry Red")
        self.assertFalse(res.data["featured"])

    def test_bulk_update(self):
        other = Product.objects.create(name="Nude", price=Decimal("10.00"))

        res = self.client.patch(
            "/api/products/bulk/",
            {
                "productIds": [str(self.product.id), str(other.id)],
                "updates": {"categoryId": str(self.polish.id), "price": "", "featured": False},
            },
            format="json",
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data, {"message": "Products updated successfully", "count": 2})
        self.assertEqual(Product.objects.filter(category=self.polish, featured=False).count(), 2)
        self.assertTrue(AdminLog.objects.filter(action_type="BULK_OPERATION").exists())

    def test_bulk_update_unknown_category(self):
        res = self.client.patch(
            "/api/products/bulk/",
            {
                "productIds": [str(self.product.id)],
                "updates": {"categoryId": "6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11"},
            },
            format="json",
        )
        self.assertEqual(res.status_code, 404)

    def test_bulk_update_rejects_top_level_subcategory(self):
        res = self.client.patch(
            "/api/products/bulk/",
            {"productIds": [str(self.product.id)], "updates": {"subcategoryIds": [str(self.polish.id)]}},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_bulk_update_without_updates(self):
        res = self.client.patch(
            "/api/products/bulk/",
            {"productIds": [str(self.product.id)], "updates": {}},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "No valid updates provided")

    def test_bulk_delete(self):
        res = self.client.delete(
            "/api/products/bulk/", {"productIds": [str(self.product.id)]}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    def test_export_csv_and_json(self):
        res = self.client.get("/api/products/export/")
        self.assertEqual(res.status_code, 200)
        self.assertIn("text/csv", res["Content-Type"])
        self.assertIn("products_", res["Content-Disposition"])
        self.assertIn('"Cherry Red"', res.content.decode())

        res = self.client.get("/api/products/export/", {"format": "json"})
        self.assertEqual(res.status_code, 200)
        rows = json.loads(res.content)
        self.assertEqual(rows[0]["name"], "Cherry Red")

        res = self.client.get("/api/products/export/", {"format": "xml"})
        self.assertEqual(res.status_code, 400)


class CategoryApiTests(TestCase):
    """
    GUARANTEES:
    - Categories list is paginated and reports product counts
    - Slug rules: required, normalized, unique
    - Categories with products cannot be deleted
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass1234", role="admin")

        self.polish = Category.objects.create(name="Gel Polish", slug="gel-polish")
        self.tools = Category.objects.create(name="Tools", slug="tools")
        Product.objects.create(name="Cherry Red", price=Decimal("14.90"), category=self.polish)

    def test_list_with_quantity(self):
        res = self.client.get("/api/categories/", {"search": "POLISH"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["pagination"]["limit"], 10)
        self.assertEqual(len(res.data["categories"]), 1)
        self.assertEqual(res.data["categories"][0]["quantity"], 1)

    def test_create_requires_name_and_slug(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post("/api/categories/", {"name": "Only name"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Name and slug are required")

    def test_create_normalizes_and_rejects_duplicates(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post("/api/categories/", {"name": "Nail Art", "slug": " Nail-Art "}, format="json")
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["slug"], "nail-art")

        res = self.client.post("/api/categories/", {"name": "Again", "slug": "NAIL-ART"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertIn("already exists", res.data["detail"])

    def test_delete_blocked_while_products_remain(self):
        self.client.force_authenticate(self.admin)

        res = self.client.delete(f"/api/categories/{self.polish.id}/")
        self.assertEqual(res.status_code, 400)

        res = self.client.delete(f"/api/categories/{self.tools.id}/")
        self.assertEqual(res.status_code, 200)

    def test_bulk_delete_reports_blocking_categories(self):
        self.client.force_authenticate(self.admin)

        res = self.client.delete(
            "/api/categories/bulk/",
            {"categoryIds": [str(self.polish.id), str(self.tools.id)]},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["categories"], ["Gel Polish"])

    def test_duplicate(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(f"/api/categories/{self.tools.id}/duplicate/")
        self.assertEqual(res.status_code, 201)
        self.assertTrue(res.data["slug"].startswith("tools-copy-"))
