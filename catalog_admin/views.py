"""
Storefront (public) reads. Every queryset here starts from a helper in
queries.py or a resolver in hierarchy.py, so hidden entities and anything
under a hidden ancestor never reach the site.
"""
# Standard Library
from collections import defaultdict

# Django REST Framework
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .filters import CategoryFilter, SubCategoryFilter, ProductFilter, apply_filterset
from .hierarchy import resolve_category, resolve_subcategory, resolve_product
from .queries import (
    public_navbar_categories, public_categories, public_subcategories, public_products,
    paginate, parse_pagination,
)
from .serializers import (
    PublicNavbarCategorySerializer, PublicCategorySerializer,
    PublicSubCategorySerializer, PublicProductSerializer,
)

# storefront filters only narrow; visibility is fixed by the query helpers
_PUBLIC_IGNORED_PARAMS = ("isActive",)


def _public_params(query_params):
    params = query_params.copy()
    for key in _PUBLIC_IGNORED_PARAMS:
        params.pop(key, None)
    return params


class PublicAPIView(APIView):
    authentication_classes = ()
    permission_classes = [AllowAny]


class ShowNavItemsAPIView(PublicAPIView):
    """Navbar menu tree: navbar categories -> categories -> subcategories."""

    def get(self, request):
        subcategories_by_category = defaultdict(list)
        for sub in public_subcategories().order_by("name"):
            subcategories_by_category[sub.category_id].append(
                {"id": sub.pk, "name": sub.name, "slug": sub.slug, "url": f"/products/{sub.category.slug}/{sub.slug}"}
            )

        categories_by_navbar = defaultdict(list)
        for cat in public_categories().order_by("name"):
            categories_by_navbar[cat.navbar_category_id].append({
                "id": cat.pk,
                "name": cat.name,
                "slug": cat.slug,
                "image": cat.image,
                "url": f"/products/{cat.slug}",
                "subcategories": subcategories_by_category.get(cat.pk, []),
            })

        data = [
            {
                "id": navbar.pk,
                "name": navbar.name,
                "slug": navbar.slug,
                "order": navbar.order,
                "categories": categories_by_navbar.get(navbar.pk, []),
            }
            for navbar in public_navbar_categories()
        ]
        return Response({"success": True, "data": data})


class PublicNavbarCategoryAPIView(PublicAPIView):
    def get(self, request):
        return Response({
            "success": True,
            "data": PublicNavbarCategorySerializer(public_navbar_categories(), many=True).data,
        })


class PublicCategoryAPIView(PublicAPIView):
    def get(self, request):
        categories = apply_filterset(CategoryFilter, _public_params(request.query_params), public_categories())
        return Response({
            "success": True,
            "data": PublicCategorySerializer(categories.order_by("name"), many=True).data,
        })


class PublicSubCategoryAPIView(PublicAPIView):
    def get(self, request):
        subcategories = apply_filterset(SubCategoryFilter, _public_params(request.query_params), public_subcategories())
        return Response({
            "success": True,
            "data": PublicSubCategorySerializer(subcategories.order_by("name"), many=True).data,
        })


class PublicProductAPIView(PublicAPIView):
    def get(self, request):
        products = apply_filterset(ProductFilter, _public_params(request.query_params), public_products())
        limit, offset = parse_pagination(request.query_params)
        items, pagination = paginate(products.order_by("-created_at", "-id"), limit, offset)
        return Response({
            "success": True,
            "data": PublicProductSerializer(items, many=True).data,
            "pagination": pagination,
        })


class CategoryPageAPIView(PublicAPIView):
    """/products/<category>"""

    def get(self, request, category_slug):
        category = resolve_category(category_slug)
        subcategories = public_subcategories().filter(category=category).order_by("name")
        return Response({
            "success": True,
            "data": {
                "category": PublicCategorySerializer(category).data,
                "subcategories": PublicSubCategorySerializer(subcategories, many=True).data,
            },
        })


class SubCategoryPageAPIView(PublicAPIView):
    """/products/<category>/<subcategory>"""

    def get(self, request, category_slug, subcategory_slug):
        subcategory = resolve_subcategory(category_slug, subcategory_slug)
        products = public_products().filter(subcategory=subcategory, category=subcategory.category)
        return Response({
            "success": True,
            "data": {
                "subcategory": PublicSubCategorySerializer(subcategory).data,
                "products": PublicProductSerializer(products.order_by("-created_at", "-id"), many=True).data,
            },
        })


class ProductPageAPIView(PublicAPIView):
    """/products/<category>/<subcategory>/<product>"""

    def get(self, request, category_slug, subcategory_slug, product_slug):
        product = resolve_product(category_slug, subcategory_slug, product_slug)
        return Response({"success": True, "data": PublicProductSerializer(product).data})
