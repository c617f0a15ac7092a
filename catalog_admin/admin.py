from django.contrib import admin
from .models import NavbarCategory, Category, SubCategory, Product, Contact, DashboardSnapshot


@admin.register(NavbarCategory)
class NavbarCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "order", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "slug")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "navbar_category", "is_active", "created_at")
    list_filter = ("is_active", "navbar_category")
    search_fields = ("name", "slug")


@admin.register(SubCategory)
class SubCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "category", "is_active", "created_at")
    list_filter = ("is_active", "category")
    search_fields = ("name", "slug")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "category", "subcategory", "is_active", "created_at")
    list_filter = ("is_active", "navbar_category", "category")
    search_fields = ("name", "slug", "description")


admin.site.register(Contact)
admin.site.register(DashboardSnapshot)
