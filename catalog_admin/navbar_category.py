# Standard Library
import logging

# Django
from django.db import transaction
from django.shortcuts import get_object_or_404

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .filters import NavbarCategoryFilter, apply_filterset
from .models import NavbarCategory
from .permissions import IsAdminToken
from .serializers import NavbarCategorySerializer
from .utilities import _to_int, _truthy, delete_with_confirm, save_or_reject

logger = logging.getLogger(__name__)


class NavbarCategoryListAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        categories = apply_filterset(NavbarCategoryFilter, request.query_params, NavbarCategory.objects.all())
        categories = categories.order_by("order", "created_at")
        return Response({"success": True, "data": NavbarCategorySerializer(categories, many=True).data})

    def post(self, request):
        serializer = NavbarCategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category, error = save_or_reject(serializer, "navbar category")
        if error:
            return error
        return Response({
            "success": True,
            "data": NavbarCategorySerializer(category).data,
            "message": "Navbar category created successfully",
        }, status=status.HTTP_201_CREATED)


class NavbarCategoryDetailAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request, pk):
        category = get_object_or_404(NavbarCategory, pk=pk)
        return Response({"success": True, "data": NavbarCategorySerializer(category).data})

    def patch(self, request, pk):
        category = get_object_or_404(NavbarCategory, pk=pk)
        serializer = NavbarCategorySerializer(category, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        category, error = save_or_reject(serializer, "navbar category")
        if error:
            return error
        return Response({
            "success": True,
            "data": NavbarCategorySerializer(category).data,
            "message": "Navbar category updated successfully",
        })

    def delete(self, request, pk):
        category = get_object_or_404(NavbarCategory, pk=pk)
        confirm = _truthy(request.query_params.get("confirm") or request.data.get("confirm"))
        dependents = category.categories.count() + category.products.count()
        return delete_with_confirm(category, dependents, confirm, "navbar category")


class UpdateNavbarCategoryOrderAPIView(APIView):
    """
    POST {"ordered": [{"id": 3, "order": 1}, ...]} -> rewrites menu order.
    """
    permission_classes = [IsAdminToken]

    def post(self, request):
        ordered = request.data.get("ordered") or []
        if not isinstance(ordered, list) or not ordered:
            return Response({"success": False, "error": "No order provided"}, status=status.HTTP_400_BAD_REQUEST)

        updated = 0
        with transaction.atomic():
            for item in ordered:
                if not isinstance(item, dict) or "id" not in item:
                    continue
                updated += NavbarCategory.objects.filter(pk=_to_int(item["id"], -1)).update(
                    order=_to_int(item.get("order"), 0)
                )
        logger.info("Reordered %d navbar categories", updated)
        return Response({"success": True, "data": {"updated": updated}})
