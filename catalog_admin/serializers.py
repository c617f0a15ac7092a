from django.utils.html import strip_tags
from rest_framework import serializers

from .models import (
    NavbarCategory, Category, SubCategory, Product, Contact, DashboardSnapshot,
    SERVICE_CHOICES,
)
from .slugs import derive_slug, is_valid_slug
from .utilities import _as_list


def _summary(obj):
    if obj is None:
        return None
    return {"id": obj.pk, "name": obj.name, "slug": obj.slug, "isActive": obj.is_active}


class SlugUniquenessMixin:
    """
    Works out the slug the row will be saved with and rejects the write when
    it is empty or already taken, before the unique index would.
    """
    entity_label = "record"

    def validate(self, attrs):
        attrs = super().validate(attrs)
        instance = self.instance
        name = attrs.get("name", getattr(instance, "name", ""))
        slug = attrs.get("slug", getattr(instance, "slug", ""))
        previous = None if instance is None else (instance.name, instance.slug)
        new_slug = derive_slug(name, slug, previous)

        if not is_valid_slug(new_slug):
            raise serializers.ValidationError({"name": "Name must contain at least one letter or digit"})

        clash = self.Meta.model.objects.filter(slug=new_slug)
        if instance is not None:
            clash = clash.exclude(pk=instance.pk)
        if clash.exists():
            raise serializers.ValidationError(
                {"name": f"A {self.entity_label} with this name already exists"}
            )
        return attrs


class NavbarCategorySerializer(SlugUniquenessMixin, serializers.ModelSerializer):
    entity_label = "navbar category"

    slug = serializers.CharField(max_length=120, required=False, allow_blank=True)
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = NavbarCategory
        fields = ["id", "name", "slug", "description", "order", "isActive", "createdAt", "updatedAt"]
        extra_kwargs = {
            "name": {"max_length": 100},
        }


class CategorySerializer(SlugUniquenessMixin, serializers.ModelSerializer):
    entity_label = "category"

    slug = serializers.CharField(max_length=170, required=False, allow_blank=True)
    navbarCategory = serializers.PrimaryKeyRelatedField(
        source="navbar_category",
        queryset=NavbarCategory.objects.all(),
        error_messages={"does_not_exist": "Selected navbar category does not exist"},
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Category
        fields = [
            "id", "name", "slug", "navbarCategory", "description", "image",
            "isActive", "createdAt", "updatedAt",
        ]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["navbarCategory"] = _summary(instance.navbar_category)
        return data


class SubCategorySerializer(SlugUniquenessMixin, serializers.ModelSerializer):
    entity_label = "subcategory"

    slug = serializers.CharField(max_length=170, required=False, allow_blank=True)
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.select_related("navbar_category"),
        error_messages={"does_not_exist": "Selected category does not exist"},
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = SubCategory
        fields = [
            "id", "name", "slug", "category", "description", "image",
            "isActive", "createdAt", "updatedAt",
        ]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        category = instance.category
        data["category"] = dict(_summary(category), navbarCategory=_summary(category.navbar_category))
        return data


class KeyFeaturesField(serializers.ListField):
    """Accepts a list of strings or one newline-separated string."""
    child = serializers.CharField(max_length=500)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = _as_list(data, sep="\n")
        return super().to_internal_value(data)


class ProductSerializer(SlugUniquenessMixin, serializers.ModelSerializer):
    entity_label = "product"

    slug = serializers.CharField(max_length=220, required=False, allow_blank=True)
    keyFeatures = KeyFeaturesField(source="key_features", required=False)
    navbarCategory = serializers.PrimaryKeyRelatedField(
        source="navbar_category",
        queryset=NavbarCategory.objects.all(),
        required=False,
        error_messages={"does_not_exist": "Selected navbar category does not exist"},
    )
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.select_related("navbar_category"),
        error_messages={"does_not_exist": "Selected category does not exist"},
    )
    subcategory = serializers.PrimaryKeyRelatedField(
        queryset=SubCategory.objects.all(),
        required=False,
        allow_null=True,
        error_messages={"does_not_exist": "Selected subcategory does not exist"},
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id", "name", "slug", "description", "keyFeatures",
            "image1", "image2", "image3", "image4",
            "navbarCategory", "category", "subcategory",
            "isActive", "createdAt", "updatedAt",
        ]

    def validate(self, attrs):
        attrs = super().validate(attrs)
        instance = self.instance

        category = attrs.get("category", getattr(instance, "category", None))
        if "navbar_category" not in attrs and (instance is None or "category" in attrs):
            attrs["navbar_category"] = category.navbar_category
        navbar = attrs.get("navbar_category", getattr(instance, "navbar_category", None))
        subcategory = attrs["subcategory"] if "subcategory" in attrs else getattr(instance, "subcategory", None)

        if category.navbar_category_id != navbar.pk:
            raise serializers.ValidationError(
                {"category": "Category does not belong to the selected navbar category"}
            )
        if subcategory is not None and subcategory.category_id != category.pk:
            raise serializers.ValidationError(
                {"subcategory": "Subcategory does not belong to the selected category"}
            )
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["navbarCategory"] = _summary(instance.navbar_category)
        data["category"] = _summary(instance.category)
        data["subcategory"] = _summary(instance.subcategory)
        return data


# -- storefront (read-only) --

class PublicNavbarCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = NavbarCategory
        fields = ["id", "name", "slug", "description", "order"]


class PublicCategorySerializer(serializers.ModelSerializer):
    navbarCategory = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "image", "navbarCategory"]

    def get_navbarCategory(self, obj):
        return {"id": obj.navbar_category_id, "name": obj.navbar_category.name, "slug": obj.navbar_category.slug}


class PublicSubCategorySerializer(serializers.ModelSerializer):
    category = PublicCategorySerializer(read_only=True)

    class Meta:
        model = SubCategory
        fields = ["id", "name", "slug", "description", "image", "category"]


class PublicProductSerializer(serializers.ModelSerializer):
    keyFeatures = serializers.ListField(source="key_features", child=serializers.CharField(), read_only=True)
    navbarCategory = serializers.SerializerMethodField()
    category = serializers.SerializerMethodField()
    subcategory = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id", "name", "slug", "description", "keyFeatures",
            "image1", "image2", "image3", "image4",
            "navbarCategory", "category", "subcategory",
        ]

    def _ref(self, obj):
        if obj is None:
            return None
        return {"id": obj.pk, "name": obj.name, "slug": obj.slug}

    def get_navbarCategory(self, obj):
        return self._ref(obj.navbar_category)

    def get_category(self, obj):
        return self._ref(obj.category)

    def get_subcategory(self, obj):
        return self._ref(obj.subcategory)


# -- contacts --

class SanitizedCharField(serializers.CharField):
    """CharField with markup stripped before length checks."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return strip_tags(value).strip()


class ContactSubmissionSerializer(serializers.Serializer):
    fullName = SanitizedCharField(source="full_name", min_length=2, max_length=100)
    email = serializers.EmailField(max_length=254)
    phone = SanitizedCharField(min_length=10, max_length=20)
    company = SanitizedCharField(max_length=200, required=False, allow_blank=True, default="")
    service = serializers.ChoiceField(choices=SERVICE_CHOICES)
    subject = SanitizedCharField(min_length=5, max_length=200)
    message = SanitizedCharField(min_length=10, max_length=2000)

    def create(self, validated_data):
        return Contact.objects.create(
            priority=Contact.priority_for_service(validated_data["service"]),
            **validated_data,
        )


class ContactSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="full_name", read_only=True)
    isRead = serializers.BooleanField(source="is_read", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Contact
        fields = [
            "id", "fullName", "email", "phone", "company", "service", "subject", "message",
            "status", "priority", "source", "isRead", "createdAt", "updatedAt",
        ]
        read_only_fields = fields


class ContactUpdateSerializer(serializers.ModelSerializer):
    """Admin triage edits; any other key in the payload is ignored."""
    isRead = serializers.BooleanField(source="is_read", required=False)

    class Meta:
        model = Contact
        fields = ["status", "priority", "isRead"]
        extra_kwargs = {
            "status": {"required": False},
            "priority": {"required": False},
        }


# -- dashboard --

class DashboardSnapshotSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="snapshot_type", read_only=True)
    overview = serializers.SerializerMethodField()
    contacts = serializers.SerializerMethodField()
    growth = serializers.SerializerMethodField()
    serviceDistribution = serializers.JSONField(source="service_distribution", read_only=True)
    contactsTrend = serializers.JSONField(source="contacts_trend", read_only=True)
    productsTrend = serializers.JSONField(source="products_trend", read_only=True)
    productsByCategory = serializers.JSONField(source="products_by_category", read_only=True)
    categoriesBreakdown = serializers.JSONField(source="categories_breakdown", read_only=True)
    completionRate = serializers.IntegerField(source="completion_rate", read_only=True)
    avgResponseTime = serializers.IntegerField(source="avg_response_time", read_only=True)
    summary = serializers.DictField(read_only=True)
    generatedAt = serializers.DateTimeField(source="generated_at", read_only=True)
    periodStart = serializers.DateTimeField(source="period_start", read_only=True)
    periodEnd = serializers.DateTimeField(source="period_end", read_only=True)
    createdBy = serializers.CharField(source="created_by", read_only=True)

    class Meta:
        model = DashboardSnapshot
        fields = [
            "id", "type", "overview", "contacts", "growth",
            "serviceDistribution", "contactsTrend", "productsTrend",
            "productsByCategory", "categoriesBreakdown",
            "completionRate", "avgResponseTime", "summary",
            "generatedAt", "periodStart", "periodEnd", "createdBy",
        ]

    def get_overview(self, obj):
        return {
            "totalContacts": obj.total_contacts,
            "totalProducts": obj.total_products,
            "totalNavbarCategories": obj.total_navbar_categories,
            "totalCategories": obj.total_categories,
            "totalSubcategories": obj.total_subcategories,
        }

    def get_contacts(self, obj):
        return {
            "new": obj.new_contacts,
            "replied": obj.replied_contacts,
            "inProgress": obj.in_progress_contacts,
            "closed": obj.closed_contacts,
            "unread": obj.unread_contacts,
            "highPriority": obj.high_priority_contacts,
        }

    def get_growth(self, obj):
        return {
            "contacts": obj.contacts_growth,
            "products": obj.products_growth,
            "categories": obj.categories_growth,
        }
