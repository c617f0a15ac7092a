"""
Public read helpers. Every storefront read goes through one of these so an
inactive entity, or an active one under an inactive ancestor, never leaks.
"""
from django.db.models import Q

from .models import NavbarCategory, Category, SubCategory, Product
from .utilities import _to_int

MAX_FETCH_LIMIT = 1000
DEFAULT_PAGE_SIZE = 10


def public_navbar_categories():
    return NavbarCategory.objects.filter(is_active=True).order_by("order", "created_at")


def public_categories():
    return (
        Category.objects
        .filter(is_active=True, navbar_category__is_active=True)
        .select_related("navbar_category")
    )


def public_subcategories():
    return (
        SubCategory.objects
        .filter(
            is_active=True,
            category__is_active=True,
            category__navbar_category__is_active=True,
        )
        .select_related("category__navbar_category")
    )


def public_products():
    return (
        Product.objects
        .filter(
            is_active=True,
            navbar_category__is_active=True,
            category__is_active=True,
            category__navbar_category__is_active=True,
        )
        .filter(Q(subcategory__isnull=True) | Q(subcategory__is_active=True))
        .select_related("navbar_category", "category", "subcategory")
    )


def parse_pagination(params, default_limit=DEFAULT_PAGE_SIZE, offset_param="offset"):
    """(limit, offset) from query params; limit is clamped to 1..MAX_FETCH_LIMIT."""
    limit = _to_int(params.get("limit"), default_limit)
    limit = min(max(limit, 1), MAX_FETCH_LIMIT)
    offset = max(_to_int(params.get(offset_param), 0), 0)
    return limit, offset


def paginate(queryset, limit, offset, offset_param="offset"):
    total = queryset.count()
    items = list(queryset[offset:offset + limit])
    return items, {
        "total": total,
        "limit": limit,
        offset_param: offset,
        "hasMore": offset + len(items) < total,
    }
