"""
Resolves storefront URL paths (/products/<category>/<subcategory>/<product>)
against the catalog tree. Each leaf is fetched with its ancestors joined and
every ancestor must match the path segment it was reached by and be active.
Any mismatch is reported as a plain 404, indistinguishable from an unknown
slug, so hierarchy details are never leaked.
"""
from django.http import Http404

from .models import Category, SubCategory, Product


def _require(condition):
    if not condition:
        raise Http404()


def _category_visible(category):
    return category.is_active and category.navbar_category.is_active


def resolve_category(category_slug):
    category = (
        Category.objects
        .select_related("navbar_category")
        .filter(slug=category_slug)
        .first()
    )
    _require(category is not None and _category_visible(category))
    return category


def resolve_subcategory(category_slug, subcategory_slug):
    subcategory = (
        SubCategory.objects
        .select_related("category__navbar_category")
        .filter(slug=subcategory_slug)
        .first()
    )
    _require(subcategory is not None and subcategory.is_active)
    _require(subcategory.category.slug == category_slug)
    _require(_category_visible(subcategory.category))
    return subcategory


def resolve_product(category_slug, subcategory_slug, product_slug):
    product = (
        Product.objects
        .select_related("navbar_category", "category__navbar_category", "subcategory__category")
        .filter(slug=product_slug)
        .first()
    )
    _require(product is not None and product.is_active)
    _require(product.subcategory is not None)

    category = product.category
    subcategory = product.subcategory
    _require(category.slug == category_slug)
    _require(subcategory.slug == subcategory_slug)
    _require(subcategory.category_id == category.pk)
    _require(subcategory.is_active and _category_visible(category))
    _require(product.navbar_category_id == category.navbar_category_id)
    return product
