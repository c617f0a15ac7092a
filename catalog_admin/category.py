# Standard Library
import logging

# Django
from django.db import transaction
from django.db.models import Count
from django.shortcuts import get_object_or_404
from django.utils import timezone

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .filters import CategoryFilter, SubCategoryFilter, apply_filterset
from .models import NavbarCategory, Category, SubCategory, Product
from .permissions import IsAdminToken
from .serializers import CategorySerializer, SubCategorySerializer
from .utilities import _to_int, _truthy, delete_with_confirm, save_or_reject

logger = logging.getLogger(__name__)


class CategoryListAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        categories = apply_filterset(
            CategoryFilter,
            request.query_params,
            Category.objects.select_related("navbar_category"),
        )
        categories = categories.annotate(
            subcategory_count=Count("subcategories", distinct=True),
            product_count=Count("products", distinct=True),
        )
        data = []
        for category in categories:
            row = CategorySerializer(category).data
            row["subcategoryCount"] = category.subcategory_count
            row["productCount"] = category.product_count
            data.append(row)
        return Response({"success": True, "data": data})

    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category, error = save_or_reject(serializer, "category")
        if error:
            return error
        return Response({
            "success": True,
            "data": CategorySerializer(category).data,
            "message": "Category created successfully",
        }, status=status.HTTP_201_CREATED)


class CategoryDetailAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request, pk):
        category = get_object_or_404(Category.objects.select_related("navbar_category"), pk=pk)
        return Response({"success": True, "data": CategorySerializer(category).data})

    def patch(self, request, pk):
        category = get_object_or_404(Category, pk=pk)
        serializer = CategorySerializer(category, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        navbar_changed = serializer.validated_data.get("navbar_category", category.navbar_category) != category.navbar_category

        with transaction.atomic():
            category, error = save_or_reject(serializer, "category")
            if error:
                return error
            if navbar_changed:
                # products carry their navbar category; keep them in line with the new parent
                moved = Product.objects.filter(category=category).update(navbar_category=category.navbar_category)
                logger.info("Category %s moved navbar; %d products re-parented", category.pk, moved)

        return Response({
            "success": True,
            "data": CategorySerializer(category).data,
            "message": "Category updated successfully",
        })

    def delete(self, request, pk):
        category = get_object_or_404(Category, pk=pk)
        confirm = _truthy(request.query_params.get("confirm") or request.data.get("confirm"))
        dependents = category.subcategories.count() + category.products.count()
        return delete_with_confirm(category, dependents, confirm, "category")


class SubCategoryListAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        subcategories = apply_filterset(
            SubCategoryFilter,
            request.query_params,
            SubCategory.objects.select_related("category__navbar_category"),
        )
        subcategories = subcategories.annotate(product_count=Count("products"))
        data = []
        for subcategory in subcategories:
            row = SubCategorySerializer(subcategory).data
            row["productCount"] = subcategory.product_count
            data.append(row)
        return Response({"success": True, "data": data})

    def post(self, request):
        serializer = SubCategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subcategory, error = save_or_reject(serializer, "subcategory")
        if error:
            return error
        return Response({
            "success": True,
            "data": SubCategorySerializer(subcategory).data,
            "message": "Subcategory created successfully",
        }, status=status.HTTP_201_CREATED)


class SubCategoryDetailAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request, pk):
        subcategory = get_object_or_404(SubCategory.objects.select_related("category__navbar_category"), pk=pk)
        return Response({"success": True, "data": SubCategorySerializer(subcategory).data})

    def patch(self, request, pk):
        subcategory = get_object_or_404(SubCategory, pk=pk)
        serializer = SubCategorySerializer(subcategory, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        new_category = serializer.validated_data.get("category", subcategory.category)
        if new_category.pk != subcategory.category_id and subcategory.products.exists():
            return Response({
                "success": False,
                "error": "Move or delete this subcategory's products before changing its category",
            }, status=status.HTTP_400_BAD_REQUEST)

        subcategory, error = save_or_reject(serializer, "subcategory")
        if error:
            return error
        return Response({
            "success": True,
            "data": SubCategorySerializer(subcategory).data,
            "message": "Subcategory updated successfully",
        })

    def delete(self, request, pk):
        subcategory = get_object_or_404(SubCategory, pk=pk)
        confirm = _truthy(request.query_params.get("confirm") or request.data.get("confirm"))
        dependents = subcategory.products.count()
        return delete_with_confirm(subcategory, dependents, confirm, "subcategory")


class UpdateActiveStatusAPIView(APIView):
    """
    POST {"type": "categories", "ids": [1, 2], "isActive": false}
    Shows or hides several rows of one kind at once.
    """
    permission_classes = [IsAdminToken]

    MODELS = {
        "navbar-categories": NavbarCategory,
        "categories": Category,
        "subcategories": SubCategory,
        "products": Product,
    }

    def post(self, request):
        item_type = request.data.get("type")
        ids = request.data.get("ids")
        if not ids or not isinstance(ids, list):
            return Response({"success": False, "error": "No valid IDs provided"}, status=status.HTTP_400_BAD_REQUEST)

        model = self.MODELS.get(item_type)
        if model is None:
            return Response({"success": False, "error": "Invalid type"}, status=status.HTTP_400_BAD_REQUEST)

        ids = [pk for pk in (_to_int(i, None) for i in ids) if pk is not None]
        if not ids:
            return Response({"success": False, "error": "No valid IDs provided"}, status=status.HTTP_400_BAD_REQUEST)

        is_active = _truthy(request.data.get("isActive", True))
        updated = model.objects.filter(pk__in=ids).update(is_active=is_active, updated_at=timezone.now())
        logger.info("Set isActive=%s on %d %s", is_active, updated, item_type)
        return Response({
            "success": True,
            "data": {"updated": updated},
            "message": f"{item_type.replace('-', ' ').title()} {'shown' if is_active else 'hidden'}",
        })
