from django.http import Http404
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from catalog_admin.hierarchy import resolve_category, resolve_subcategory, resolve_product
from catalog_admin.tests.factories import TestDataFactory


class ResolverTests(TestCase):

    def setUp(self):
        self.navbar, self.category, self.subcategory, self.product = TestDataFactory.create_tree()

    def test_resolves_full_path(self):
        product = resolve_product("switches", "campus-switches", "s5735-switch")
        self.assertEqual(product.pk, self.product.pk)
        self.assertEqual(resolve_subcategory("switches", "campus-switches").pk, self.subcategory.pk)
        self.assertEqual(resolve_category("switches").pk, self.category.pk)

    def test_wrong_category_segment_is_not_found(self):
        other = TestDataFactory.create_category("Routers", self.navbar)
        TestDataFactory.create_subcategory("Branch Routers", other)
        with self.assertRaises(Http404):
            resolve_product("routers", "campus-switches", "s5735-switch")
        with self.assertRaises(Http404):
            resolve_subcategory("routers", "campus-switches")

    def test_wrong_subcategory_segment_is_not_found(self):
        TestDataFactory.create_subcategory("Core Switches", self.category)
        with self.assertRaises(Http404):
            resolve_product("switches", "core-switches", "s5735-switch")

    def test_unknown_slug_is_not_found(self):
        with self.assertRaises(Http404):
            resolve_product("switches", "campus-switches", "nope")
        with self.assertRaises(Http404):
            resolve_category("nope")

    def test_inactive_ancestor_hides_product(self):
        self.navbar.is_active = False
        self.navbar.save()
        with self.assertRaises(Http404):
            resolve_product("switches", "campus-switches", "s5735-switch")
        with self.assertRaises(Http404):
            resolve_category("switches")

    def test_inactive_subcategory_hides_product(self):
        self.subcategory.is_active = False
        self.subcategory.save()
        with self.assertRaises(Http404):
            resolve_product("switches", "campus-switches", "s5735-switch")

    def test_product_without_subcategory_has_no_page(self):
        TestDataFactory.create_product("Loose Item", category=self.category)
        with self.assertRaises(Http404):
            resolve_product("switches", "campus-switches", "loose-item")


class ProductPageAPITests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.navbar, self.category, self.subcategory, self.product = TestDataFactory.create_tree()

    def test_product_page(self):
        response = self.client.get("/api/products/switches/campus-switches/s5735-switch/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"]["slug"], "s5735-switch")
        self.assertEqual(response.data["data"]["category"]["slug"], "switches")

    def test_mismatch_and_unknown_look_the_same(self):
        TestDataFactory.create_category("Routers", self.navbar)
        mismatch = self.client.get("/api/products/routers/campus-switches/s5735-switch/")
        unknown = self.client.get("/api/products/switches/campus-switches/does-not-exist/")
        self.assertEqual(mismatch.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(unknown.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(mismatch.data, unknown.data)
        self.assertFalse(mismatch.data["success"])

    def test_category_page_lists_active_subcategories(self):
        TestDataFactory.create_subcategory("Hidden Switches", self.category, is_active=False)
        response = self.client.get("/api/products/switches/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        slugs = [s["slug"] for s in response.data["data"]["subcategories"]]
        self.assertEqual(slugs, ["campus-switches"])

    def test_subcategory_page_lists_active_products(self):
        TestDataFactory.create_product("Retired Switch", self.subcategory, is_active=False)
        response = self.client.get("/api/products/switches/campus-switches/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        slugs = [p["slug"] for p in response.data["data"]["products"]]
        self.assertEqual(slugs, ["s5735-switch"])
