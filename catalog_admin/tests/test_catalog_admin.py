"""
Admin catalog API: navbar categories, categories, subcategories, products.
"""
from unittest import mock

from django.db import DatabaseError
from django.db.models import QuerySet
from django.test import TestCase
from rest_framework import status

from catalog_admin.models import NavbarCategory, Category, SubCategory, Product
from catalog_admin.tests.factories import TestDataFactory, AuthenticatedAPIClient


class AdminAPITestCase(TestCase):

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)


class AuthRequiredTests(TestCase):

    def test_admin_endpoints_reject_anonymous(self):
        client = AuthenticatedAPIClient()
        for url in (
            "/api/admin/navbar-categories/",
            "/api/admin/categories/",
            "/api/admin/subcategories/",
            "/api/admin/products/",
            "/api/dashboard/stats/",
        ):
            response = client.get(url)
            self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, url)
            self.assertFalse(response.data["success"])

    def test_forged_token_rejected(self):
        client = AuthenticatedAPIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {TestDataFactory.unsigned_token()}")
        response = client.get("/api/admin/products/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_non_staff_token_forbidden(self):
        user = TestDataFactory.create_admin(is_staff=False)
        client = AuthenticatedAPIClient().authenticate_user(user)
        response = client.get("/api/admin/products/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class NavbarCategoryAdminTests(AdminAPITestCase):

    def test_create_derives_slug(self):
        response = self.client.post("/api/admin/navbar-categories/", {"name": "Smart Cameras", "order": 2})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["slug"], "smart-cameras")
        self.assertTrue(response.data["data"]["isActive"])

    def test_colliding_slug_rejected(self):
        self.client.post("/api/admin/navbar-categories/", {"name": "Wi-Fi"})
        response = self.client.post("/api/admin/navbar-categories/", {"name": "Wi Fi"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("already exists", response.data["error"])
        self.assertEqual(NavbarCategory.objects.count(), 1)

    def test_name_without_letters_rejected(self):
        response = self.client.post("/api/admin/navbar-categories/", {"name": "!!!"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(NavbarCategory.objects.exists())

    def test_rename_regenerates_slug(self):
        navbar = TestDataFactory.create_navbar_category("Storage")
        response = self.client.patch(f"/api/admin/navbar-categories/{navbar.pk}/", {"name": "Flash Storage"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["slug"], "flash-storage")

    def test_rename_with_explicit_slug_keeps_it(self):
        navbar = TestDataFactory.create_navbar_category("Storage")
        response = self.client.patch(
            f"/api/admin/navbar-categories/{navbar.pk}/", {"name": "Flash Storage", "slug": "all-flash"}
        )
        self.assertEqual(response.data["data"]["slug"], "all-flash")

    def test_list_shows_inactive_and_filters(self):
        TestDataFactory.create_navbar_category("Visible")
        TestDataFactory.create_navbar_category("Hidden", is_active=False)
        response = self.client.get("/api/admin/navbar-categories/")
        self.assertEqual(len(response.data["data"]), 2)
        response = self.client.get("/api/admin/navbar-categories/", {"isActive": "false"})
        self.assertEqual([n["name"] for n in response.data["data"]], ["Hidden"])

    def test_delete_with_children_needs_confirm(self):
        navbar, category, subcategory, product = TestDataFactory.create_tree()
        response = self.client.delete(f"/api/admin/navbar-categories/{navbar.pk}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["confirm"])
        self.assertTrue(NavbarCategory.objects.filter(pk=navbar.pk).exists())

        response = self.client.delete(f"/api/admin/navbar-categories/{navbar.pk}/?confirm=true")
        self.assertTrue(response.data["success"])
        self.assertFalse(NavbarCategory.objects.exists())
        self.assertFalse(Category.objects.exists())
        self.assertFalse(SubCategory.objects.exists())
        self.assertFalse(Product.objects.exists())

    def test_reorder(self):
        a = TestDataFactory.create_navbar_category("A", order=1)
        b = TestDataFactory.create_navbar_category("B", order=2)
        response = self.client.post(
            "/api/admin/navbar-categories/order/",
            {"ordered": [{"id": a.pk, "order": 5}, {"id": b.pk, "order": 0}]},
        )
        self.assertEqual(response.data["data"]["updated"], 2)
        names = [n["name"] for n in self.client.get("/api/admin/navbar-categories/").data["data"]]
        self.assertEqual(names, ["B", "A"])

    def test_unknown_id_is_not_found(self):
        response = self.client.get("/api/admin/navbar-categories/9999/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])


class CategoryAdminTests(AdminAPITestCase):

    def setUp(self):
        super().setUp()
        self.navbar = TestDataFactory.create_navbar_category("Networking")

    def test_create_and_nested_representation(self):
        response = self.client.post(
            "/api/admin/categories/", {"name": "Switches", "navbarCategory": self.navbar.pk}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["slug"], "switches")
        self.assertEqual(response.data["data"]["navbarCategory"]["slug"], "networking")

    def test_missing_parent_rejected(self):
        response = self.client.post("/api/admin/categories/", {"name": "Switches", "navbarCategory": 9999})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Category.objects.exists())

    def test_list_counts_children(self):
        category = TestDataFactory.create_category("Switches", self.navbar)
        sub = TestDataFactory.create_subcategory("Campus", category)
        TestDataFactory.create_product("One", sub)
        TestDataFactory.create_product("Two", sub)
        row = self.client.get("/api/admin/categories/").data["data"][0]
        self.assertEqual(row["subcategoryCount"], 1)
        self.assertEqual(row["productCount"], 2)

    def test_moving_category_realigns_products(self):
        category = TestDataFactory.create_category("Switches", self.navbar)
        product = TestDataFactory.create_product("One", category=category)
        other = TestDataFactory.create_navbar_category("Enterprise")
        response = self.client.patch(f"/api/admin/categories/{category.pk}/", {"navbarCategory": other.pk})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertEqual(product.navbar_category_id, other.pk)

    def test_subcategory_crud(self):
        category = TestDataFactory.create_category("Switches", self.navbar)
        response = self.client.post("/api/admin/subcategories/", {"name": "Campus Switches", "category": category.pk})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        sub_id = response.data["data"]["id"]
        self.assertEqual(response.data["data"]["category"]["navbarCategory"]["slug"], "networking")

        response = self.client.patch(f"/api/admin/subcategories/{sub_id}/", {"isActive": False})
        self.assertFalse(response.data["data"]["isActive"])

        response = self.client.delete(f"/api/admin/subcategories/{sub_id}/")
        self.assertTrue(response.data["success"])
        self.assertFalse(SubCategory.objects.exists())

    def test_bulk_visibility(self):
        a = TestDataFactory.create_category("A", self.navbar)
        b = TestDataFactory.create_category("B", self.navbar)
        response = self.client.post(
            "/api/admin/visibility/", {"type": "categories", "ids": [a.pk, b.pk], "isActive": False}
        )
        self.assertEqual(response.data["data"]["updated"], 2)
        self.assertFalse(Category.objects.filter(is_active=True).exists())

    def test_bulk_visibility_rejects_non_numeric_ids(self):
        category = TestDataFactory.create_category("A", self.navbar)
        response = self.client.post(
            "/api/admin/visibility/", {"type": "products", "ids": ["abc", {"id": 1}]}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])

        response = self.client.post(
            "/api/admin/visibility/", {"type": "categories", "ids": ["abc", str(category.pk)], "isActive": False}
        )
        self.assertEqual(response.data["data"]["updated"], 1)

    def test_failed_product_realignment_rolls_back_move(self):
        category = TestDataFactory.create_category("Switches", self.navbar)
        product = TestDataFactory.create_product("One", category=category)
        other = TestDataFactory.create_navbar_category("Enterprise")

        with mock.patch.object(QuerySet, "update", side_effect=DatabaseError("write failed")):
            with self.assertRaises(DatabaseError):
                self.client.patch(f"/api/admin/categories/{category.pk}/", {"navbarCategory": other.pk})

        category.refresh_from_db()
        product.refresh_from_db()
        self.assertEqual(category.navbar_category_id, self.navbar.pk)
        self.assertEqual(product.navbar_category_id, self.navbar.pk)


class ProductAdminTests(AdminAPITestCase):

    def setUp(self):
        super().setUp()
        self.navbar, self.category, self.subcategory, self.product = TestDataFactory.create_tree()

    def _payload(self, **overrides):
        payload = {
            "name": "AirEngine 6760",
            "description": "Wi-Fi 6 access point",
            "keyFeatures": ["Wi-Fi 6", "Smart antennas"],
            "image1": "/uploads/products/ap.png",
            "category": self.category.pk,
            "subcategory": self.subcategory.pk,
        }
        payload.update(overrides)
        return payload

    def test_create_derives_navbar_from_category(self):
        response = self.client.post("/api/admin/products/", self._payload())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["slug"], "airengine-6760")
        self.assertEqual(data["navbarCategory"]["id"], self.navbar.pk)
        self.assertEqual(data["keyFeatures"], ["Wi-Fi 6", "Smart antennas"])

    def test_key_features_from_text(self):
        response = self.client.post("/api/admin/products/", self._payload(keyFeatures="Wi-Fi 6\n\nSmart antennas\n"))
        self.assertEqual(response.data["data"]["keyFeatures"], ["Wi-Fi 6", "Smart antennas"])

    def test_mismatched_navbar_rejected(self):
        other = TestDataFactory.create_navbar_category("Storage")
        response = self.client.post("/api/admin/products/", self._payload(navbarCategory=other.pk))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_subcategory_from_other_category_rejected(self):
        other_category = TestDataFactory.create_category("Routers", self.navbar)
        response = self.client.post("/api/admin/products/", self._payload(category=other_category.pk))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("subcategory", response.data["error"])

    def test_required_fields(self):
        response = self.client.post("/api/admin/products/", {"name": "Bare"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("description", "image1", "category"):
            self.assertIn(field, response.data["error"])

    def test_duplicate_name_rejected(self):
        response = self.client.post("/api/admin/products/", self._payload(name="S5735 Switch"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Product.objects.count(), 1)

    def test_rename_updates_slug(self):
        response = self.client.patch(f"/api/admin/products/{self.product.pk}/", {"name": "S5736 Switch"})
        self.assertEqual(response.data["data"]["slug"], "s5736-switch")

    def test_put_toggles_active(self):
        response = self.client.put(f"/api/admin/products/{self.product.pk}/")
        self.assertFalse(response.data["data"]["isActive"])
        response = self.client.put(f"/api/admin/products/{self.product.pk}/")
        self.assertTrue(response.data["data"]["isActive"])

    def test_admin_list_includes_inactive_and_paginates(self):
        TestDataFactory.create_product("Hidden", self.subcategory, is_active=False)
        response = self.client.get("/api/admin/products/")
        self.assertEqual(response.data["pagination"]["total"], 2)
        response = self.client.get("/api/admin/products/", {"isActive": "true"})
        self.assertEqual([p["slug"] for p in response.data["data"]], ["s5735-switch"])

    def test_bulk_delete(self):
        extra = TestDataFactory.create_product("Extra", self.subcategory)
        response = self.client.delete("/api/admin/products/", {"ids": [self.product.pk, extra.pk]})
        self.assertEqual(response.data["data"]["deletedCount"], 2)
        self.assertFalse(Product.objects.exists())
