# Standard Library
import logging

# Django
from django.db import transaction, DatabaseError
from django.shortcuts import get_object_or_404

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .filters import ProductFilter, apply_filterset
from .models import Product
from .permissions import IsAdminToken
from .queries import paginate, parse_pagination
from .serializers import ProductSerializer
from .utilities import _to_int, _truthy, save_or_reject

logger = logging.getLogger(__name__)


def _product_queryset():
    return Product.objects.select_related("navbar_category", "category", "subcategory")


class ProductListAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        products = apply_filterset(ProductFilter, request.query_params, _product_queryset())
        limit, offset = parse_pagination(request.query_params)
        items, pagination = paginate(products.order_by("-created_at", "-id"), limit, offset)
        return Response({
            "success": True,
            "data": ProductSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product, error = save_or_reject(serializer, "product")
        if error:
            return error
        return Response({
            "success": True,
            "data": ProductSerializer(product).data,
            "message": "Product created successfully",
        }, status=status.HTTP_201_CREATED)

    def delete(self, request):
        """Bulk delete: {"ids": [..]}."""
        ids = request.data.get("ids")
        if not ids or not isinstance(ids, list):
            return Response({"success": False, "error": "No valid IDs provided"}, status=status.HTTP_400_BAD_REQUEST)

        ids = [pk for pk in (_to_int(i, None) for i in ids) if pk is not None]
        try:
            with transaction.atomic():
                deleted, _ = Product.objects.filter(pk__in=ids).delete()
        except DatabaseError:
            logger.exception("Bulk product delete failed (rolled back)")
            return Response({"success": False, "error": "Failed to delete products"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            "success": True,
            "data": {"deletedCount": deleted},
            "message": f"{deleted} product(s) deleted successfully",
        })


class ProductDetailAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request, pk):
        product = get_object_or_404(_product_queryset(), pk=pk)
        return Response({"success": True, "data": ProductSerializer(product).data})

    def patch(self, request, pk):
        product = get_object_or_404(_product_queryset(), pk=pk)
        serializer = ProductSerializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product, error = save_or_reject(serializer, "product")
        if error:
            return error
        return Response({
            "success": True,
            "data": ProductSerializer(product).data,
            "message": "Product updated successfully",
        })

    def put(self, request, pk):
        """Flip isActive, or set it when the body carries one."""
        product = get_object_or_404(_product_queryset(), pk=pk)
        if "isActive" in request.data:
            product.is_active = _truthy(request.data.get("isActive"))
        else:
            product.is_active = not product.is_active
        product.save(update_fields=["is_active", "updated_at"])
        return Response({
            "success": True,
            "data": ProductSerializer(product).data,
            "message": f"Product {'activated' if product.is_active else 'deactivated'} successfully",
        })

    def delete(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        name = product.name
        product.delete()
        logger.info("Deleted product '%s'", name)
        return Response({"success": True, "message": "Product deleted successfully"})
