from django.contrib.sitemaps import Sitemap
from django.db.models import F

from .queries import public_categories, public_subcategories, public_products


class StaticViewSitemap(Sitemap):
    priority = 1.0
    changefreq = "weekly"

    def items(self):
        return ["/", "/products", "/contact"]

    def location(self, item):
        return item


class CategorySitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.8

    def items(self):
        return public_categories().order_by("pk")

    def location(self, obj):
        return f"/products/{obj.slug}"

    def lastmod(self, obj):
        return obj.updated_at


class SubCategorySitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.7

    def items(self):
        return public_subcategories().order_by("pk")

    def location(self, obj):
        return f"/products/{obj.category.slug}/{obj.slug}"

    def lastmod(self, obj):
        return obj.updated_at


class ProductSitemap(Sitemap):
    """Only products the product page can actually resolve."""
    changefreq = "monthly"
    priority = 0.6

    def items(self):
        return (
            public_products()
            .filter(subcategory__isnull=False, subcategory__category=F("category"))
            .select_related("category", "subcategory")
            .order_by("pk")
        )

    def location(self, obj):
        return f"/products/{obj.category.slug}/{obj.subcategory.slug}/{obj.slug}"

    def lastmod(self, obj):
        return obj.updated_at


SITEMAPS = {
    "static": StaticViewSitemap,
    "categories": CategorySitemap,
    "subcategories": SubCategorySitemap,
    "products": ProductSitemap,
}
