from django.test import SimpleTestCase, TestCase

from catalog_admin.models import NavbarCategory, Product
from catalog_admin.slugs import SLUG_PATTERN, derive_slug, is_valid_slug, slugify_name
from catalog_admin.tests.factories import TestDataFactory


class SlugifyNameTests(SimpleTestCase):

    def test_lowercases_and_hyphenates(self):
        self.assertEqual(slugify_name("Smart Cameras"), "smart-cameras")

    def test_collapses_runs_and_strips_edges(self):
        self.assertEqual(slugify_name("  --Wi-Fi /  Routers!!  "), "wi-fi-routers")

    def test_wifi_without_separator_is_single_word(self):
        self.assertEqual(slugify_name("WiFi"), "wifi")

    def test_non_alphanumeric_name_gives_empty_slug(self):
        self.assertEqual(slugify_name("!!!"), "")
        self.assertFalse(is_valid_slug(slugify_name("!!!")))

    def test_model_number_keeps_digits(self):
        self.assertEqual(slugify_name("S220-24T4X!"), "s220-24t4x")

    def test_idempotent(self):
        for name in (
            "Smart Cameras", "S220-24T4X!", "  --Wi-Fi /  Routers!!  ", "WiFi", "!!!", "",
            "Café Routers", "under_score", "a--b", "already-a-slug", "UPPER lower 123",
        ):
            once = slugify_name(name)
            self.assertEqual(slugify_name(once), once, name)

    def test_result_matches_slug_pattern(self):
        for name in ("Access Points", "5G CPE", "  Data   Center ", "S5735-L48T4X-A1"):
            self.assertRegex(slugify_name(name), SLUG_PATTERN)


class DeriveSlugTests(SimpleTestCase):

    def test_new_row_uses_name(self):
        self.assertEqual(derive_slug("Smart Cameras", ""), "smart-cameras")

    def test_new_row_with_explicit_slug_normalizes_it(self):
        self.assertEqual(derive_slug("Smart Cameras", "My Cams"), "my-cams")

    def test_rename_regenerates(self):
        self.assertEqual(derive_slug("Routers", "switches", ("Switches", "switches")), "routers")

    def test_rename_with_explicit_slug_keeps_slug(self):
        self.assertEqual(derive_slug("Routers", "legacy-routers", ("Switches", "switches")), "legacy-routers")

    def test_unchanged_name_keeps_slug(self):
        self.assertEqual(derive_slug("Switches", "custom", ("Switches", "custom")), "custom")

    def test_cleared_slug_regenerates(self):
        self.assertEqual(derive_slug("Switches", "", ("Switches", "custom")), "switches")


class ModelSlugTests(TestCase):

    def test_slug_set_on_create(self):
        navbar = NavbarCategory.objects.create(name="Smart Cameras")
        self.assertEqual(navbar.slug, "smart-cameras")

    def test_slug_follows_rename_on_every_entity(self):
        navbar, category, subcategory, product = TestDataFactory.create_tree()
        for obj, new_name, expected in (
            (navbar, "Enterprise Networking", "enterprise-networking"),
            (category, "Core Switches", "core-switches"),
            (subcategory, "Data Center Switches", "data-center-switches"),
            (product, "S6730 Switch", "s6730-switch"),
        ):
            obj.name = new_name
            obj.save()
            obj.refresh_from_db()
            self.assertEqual(obj.slug, expected)

    def test_rename_after_reload(self):
        product = TestDataFactory.create_product("Old Name")
        reloaded = Product.objects.get(pk=product.pk)
        reloaded.name = "New Name"
        reloaded.save()
        self.assertEqual(Product.objects.get(pk=product.pk).slug, "new-name")

    def test_save_without_rename_keeps_custom_slug(self):
        navbar = NavbarCategory.objects.create(name="Storage", slug="Disk Arrays")
        self.assertEqual(navbar.slug, "disk-arrays")
        navbar.description = "All storage"
        navbar.save()
        self.assertEqual(NavbarCategory.objects.get(pk=navbar.pk).slug, "disk-arrays")

    def test_update_fields_with_name_also_writes_slug(self):
        navbar = NavbarCategory.objects.create(name="Storage")
        navbar.name = "Flash Storage"
        navbar.save(update_fields=["name"])
        self.assertEqual(NavbarCategory.objects.get(pk=navbar.pk).slug, "flash-storage")
