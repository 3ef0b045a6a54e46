# products/tests/test_products.py

from decimal import Decimal

from django.db import IntegrityError
from django.test import TestCase

from products.models import Category, Product, discounted_price
from products.services import catalog
from products.services.exceptions import (
    CategoryInUseError,
    CategoryNotFound,
    DuplicateSlugError,
    InvalidSubcategoryError,
    NoUpdatesError,
)


class CatalogModelTests(TestCase):
    """
    Catalog model tests.

    GUARANTEES:
    - Category slugs are unique and stored lower-case
    - Discounts derive the sale price
    """

    def test_slug_is_normalized_on_save(self):
        category = Category.objects.create(name="Gel Polish", slug="  Gel Polish ")
        self.assertEqual(category.slug, "gel-polish")

    def test_slug_must_be_unique(self):
        Category.objects.create(name="Tools", slug="tools")

        with self.assertRaises(IntegrityError):
            Category.objects.create(name="Tools again", slug="TOOLS")

    def test_discounted_price(self):
        self.assertEqual(discounted_price(Decimal("20.00"), 25), Decimal("15.00"))
        self.assertEqual(discounted_price(Decimal("9.99"), 10), Decimal("8.99"))
        self.assertIsNone(discounted_price(Decimal("9.99"), 0))
        self.assertIsNone(discounted_price(Decimal("9.99"), None))


class ProductServiceTests(TestCase):
    """
    GUARANTEES:
    - Empty attributes are stored as NULL
    - Duplicates are never featured
    - Related products prefer the same category, then featured ones
    - Bulk updates validate categories and subcategories
    """

    def setUp(self):
        self.polish = Category.objects.create(name="Gel Polish", slug="gel-polish")
        self.glitter = Category.objects.create(name="Glitter", slug="glitter", parent=self.polish)
        self.tools = Category.objects.create(name="Tools", slug="tools")

        self.red = Product.objects.create(
            name="Cherry Red", price=Decimal("14.90"), category=self.polish, featured=True
        )

    def test_create_product_stores_empty_attributes_as_null(self):
        product = catalog.create_product(
            {"name": "Nude", "price": Decimal("12.00"), "attributes": {}, "category_id": self.polish.id}
        )
        self.assertIsNone(product.attributes)
        self.assertEqual(product.category, self.polish)
        self.assertFalse(product.featured)

    def test_update_product_clears_category_with_blank_id(self):
        product = catalog.update_product(self.red, {"category_id": ""})
        self.assertIsNone(product.category)

    def test_update_product_unknown_category(self):
        with self.assertRaises(CategoryNotFound):
            catalog.update_product(self.red, {"category_id": "6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11"})

    def test_update_price_keeps_discount_in_sync(self):
        catalog.update_product(self.red, {"discount_percentage": 50})
        self.assertEqual(self.red.sale_price, Decimal("7.45"))

        catalog.update_product(self.red, {"price": Decimal("20.00")})
        self.assertEqual(self.red.sale_price, Decimal("10.00"))

    def test_subcategories_must_have_parent(self):
        with self.assertRaises(InvalidSubcategoryError):
            catalog.update_product(self.red, {"subcategory_ids": [self.tools.id]})

        catalog.update_product(self.red, {"subcategory_ids": [self.glitter.id]})
        self.assertEqual(list(self.red.subcategories.all()), [self.glitter])

    def test_duplicate_product(self):
        self.red.subcategories.set([self.glitter])
        copy = catalog.duplicate_product(self.red)

        self.assertEqual(copy.name, "Copy of Cherry Red")
        self.assertFalse(copy.featured)
        self.assertEqual(copy.price, self.red.price)
        self.assertEqual(list(copy.subcategories.all()), [self.glitter])

    def test_related_products_same_category_then_featured(self):
        same = Product.objects.create(name="Blush", price=Decimal("13.00"), category=self.polish)
        featured_tool = Product.objects.create(
            name="File", price=Decimal("3.00"), category=self.tools, featured=True
        )
        Product.objects.create(name="Buffer", price=Decimal("2.00"), category=self.tools)

        related = catalog.related_products(self.red, limit=4)

        self.assertEqual(related[0], same)
        self.assertIn(featured_tool, related)
        self.assertNotIn(self.red, related)
        self.assertEqual(len(related), 2)

    def test_bulk_update_applies_discount_per_product(self):
        other = Product.objects.create(name="Cuticle Oil", price=Decimal("10.00"))

        count = catalog.bulk_update_products(
            [self.red.id, other.id], {"discount_percentage": 10, "featured": True}
        )

        self.assertEqual(count, 2)
        other.refresh_from_db()
        self.red.refresh_from_db()
        self.assertEqual(other.sale_price, Decimal("9.00"))
        self.assertEqual(self.red.sale_price, Decimal("13.41"))
        self.assertTrue(other.featured)

    def test_bulk_update_requires_something_to_do(self):
        with self.assertRaises(NoUpdatesError):
            catalog.bulk_update_products([self.red.id], {})

    def test_bulk_update_unknown_category(self):
        with self.assertRaises(CategoryNotFound):
            catalog.bulk_update_products(
                [self.red.id], {"category_id": "6f1c2f8e-5a9e-4f57-9a3b-0c0d2b0c1a11"}
            )

    def test_bulk_delete_counts_products(self):
        Product.objects.create(name="Other", price=Decimal("1.00"))
        self.assertEqual(catalog.bulk_delete_products([self.red.id]), 1)
        self.assertEqual(Product.objects.count(), 1)


class CategoryServiceTests(TestCase):
    """
    GUARANTEES:
    - Duplicate slugs are rejected with a readable message
    - Categories in use are never deleted
    """

    def setUp(self):
        self.polish = Category.objects.create(name="Gel Polish", slug="gel-polish")

    def test_create_category_rejects_duplicate_slug(self):
        with self.assertRaises(DuplicateSlugError) as ctx:
            catalog.create_category({"name": "Polish", "slug": "Gel-Polish"})
        self.assertIn('"Gel Polish"', str(ctx.exception))

    def test_delete_category_with_products_is_blocked(self):
        Product.objects.create(name="Red", price=Decimal("1.00"), category=self.polish)

        with self.assertRaises(CategoryInUseError):
            catalog.delete_category(self.polish)
        self.assertTrue(Category.objects.filter(pk=self.polish.pk).exists())

    def test_bulk_delete_lists_categories_in_use(self):
        empty = Category.objects.create(name="Empty", slug="empty")
        Product.objects.create(name="Red", price=Decimal("1.00"), category=self.polish)

        with self.assertRaises(CategoryInUseError) as ctx:
            catalog.bulk_delete_categories([self.polish.id, empty.id])

        self.assertEqual(ctx.exception.categories, ["Gel Polish"])
        self.assertEqual(Category.objects.count(), 2)

        self.assertEqual(catalog.bulk_delete_categories([empty.id]), 1)

    def test_duplicate_category(self):
        copy = catalog.duplicate_category(self.polish)
        self.assertEqual(copy.name, "Copy of Gel Polish")
        self.assertTrue(copy.slug.startswith("gel-polish-copy-"))
