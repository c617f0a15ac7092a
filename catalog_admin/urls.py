from django.urls import path

from .navbar_category import NavbarCategoryListAPIView, NavbarCategoryDetailAPIView, UpdateNavbarCategoryOrderAPIView
from .category import (
    CategoryListAPIView, CategoryDetailAPIView,
    SubCategoryListAPIView, SubCategoryDetailAPIView,
    UpdateActiveStatusAPIView,
)
from .product import ProductListAPIView, ProductDetailAPIView
from .contact import ContactsAPIView
from .dashboard import DashboardStatsAPIView, DashboardHistoryAPIView, DashboardExportAPIView
from .utilities import UploadImageAPIView
from .views import (
    ShowNavItemsAPIView,
    PublicNavbarCategoryAPIView, PublicCategoryAPIView, PublicSubCategoryAPIView, PublicProductAPIView,
    CategoryPageAPIView, SubCategoryPageAPIView, ProductPageAPIView,
)

urlpatterns = [
    # Admin: catalog
    path("admin/navbar-categories/", NavbarCategoryListAPIView.as_view(), name="admin_navbar_categories"),
    path("admin/navbar-categories/order/", UpdateNavbarCategoryOrderAPIView.as_view(), name="admin_navbar_categories_order"),
    path("admin/navbar-categories/<int:pk>/", NavbarCategoryDetailAPIView.as_view(), name="admin_navbar_category"),
    path("admin/categories/", CategoryListAPIView.as_view(), name="admin_categories"),
    path("admin/categories/<int:pk>/", CategoryDetailAPIView.as_view(), name="admin_category"),
    path("admin/subcategories/", SubCategoryListAPIView.as_view(), name="admin_subcategories"),
    path("admin/subcategories/<int:pk>/", SubCategoryDetailAPIView.as_view(), name="admin_subcategory"),
    path("admin/products/", ProductListAPIView.as_view(), name="admin_products"),
    path("admin/products/<int:pk>/", ProductDetailAPIView.as_view(), name="admin_product"),
    path("admin/visibility/", UpdateActiveStatusAPIView.as_view(), name="admin_visibility"),
    path("upload/", UploadImageAPIView.as_view(), name="upload"),

    # Contacts (POST public, rest admin)
    path("contacts/", ContactsAPIView.as_view(), name="contacts"),

    # Dashboard
    path("dashboard/stats/", DashboardStatsAPIView.as_view(), name="dashboard_stats"),
    path("dashboard/history/", DashboardHistoryAPIView.as_view(), name="dashboard_history"),
    path("dashboard/export/", DashboardExportAPIView.as_view(), name="dashboard_export"),

    # Storefront
    path("nav-items/", ShowNavItemsAPIView.as_view(), name="nav_items"),
    path("navbar-categories/", PublicNavbarCategoryAPIView.as_view(), name="navbar_categories"),
    path("categories/", PublicCategoryAPIView.as_view(), name="categories"),
    path("subcategories/", PublicSubCategoryAPIView.as_view(), name="subcategories"),
    path("products/", PublicProductAPIView.as_view(), name="products"),
    path("products/<slug:category_slug>/", CategoryPageAPIView.as_view(), name="category_page"),
    path("products/<slug:category_slug>/<slug:subcategory_slug>/", SubCategoryPageAPIView.as_view(), name="subcategory_page"),
    path(
        "products/<slug:category_slug>/<slug:subcategory_slug>/<slug:product_slug>/",
        ProductPageAPIView.as_view(),
        name="product_page",
    ),
]
