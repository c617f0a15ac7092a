import django_filters
from django.db.models import Q
from rest_framework.exceptions import ValidationError

from .models import NavbarCategory, Category, SubCategory, Product, Contact


def apply_filterset(filterset_class, data, queryset):
    """Run a FilterSet over `queryset`, turning bad params into a 400."""
    filterset = filterset_class(data, queryset=queryset)
    if not filterset.is_valid():
        raise ValidationError(filterset.errors)
    return filterset.qs


class NavbarCategoryFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    isActive = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = NavbarCategory
        fields = ['search', 'isActive']

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(Q(name__icontains=term) | Q(description__icontains=term))


class CategoryFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    navbarCategory = django_filters.NumberFilter(field_name='navbar_category_id')
    isActive = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = Category
        fields = ['search', 'navbarCategory', 'isActive']

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(name__icontains=term)
            | Q(description__icontains=term)
            | Q(navbar_category__name__icontains=term)
        )


class SubCategoryFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    category = django_filters.NumberFilter(field_name='category_id')
    navbarCategory = django_filters.NumberFilter(field_name='category__navbar_category_id')
    isActive = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = SubCategory
        fields = ['search', 'category', 'navbarCategory', 'isActive']

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(name__icontains=term)
            | Q(description__icontains=term)
            | Q(category__name__icontains=term)
        )


class ProductFilter(django_filters.FilterSet):
    """Ancestor filters AND-ed with a free-text search."""

    search = django_filters.CharFilter(method='filter_search', label='Search')
    navbarCategory = django_filters.NumberFilter(field_name='navbar_category_id')
    category = django_filters.NumberFilter(field_name='category_id')
    subcategory = django_filters.NumberFilter(field_name='subcategory_id')
    isActive = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = Product
        fields = ['search', 'navbarCategory', 'category', 'subcategory', 'isActive']

    def filter_search(self, queryset, name, value):
        """
        Case-insensitive substring match on the product's name, description,
        key features and the names of its navbar category, category and
        subcategory.
        """
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(name__icontains=term)
            | Q(description__icontains=term)
            | Q(key_features_text__icontains=term)
            | Q(navbar_category__name__icontains=term)
            | Q(category__name__icontains=term)
            | Q(subcategory__name__icontains=term)
        )


class ContactFilter(django_filters.FilterSet):
    # "all" (the admin UI's default option) means no filter
    status = django_filters.CharFilter(method='filter_unless_all')
    priority = django_filters.CharFilter(method='filter_unless_all')
    service = django_filters.CharFilter(method='filter_unless_all')
    isRead = django_filters.BooleanFilter(field_name='is_read')
    search = django_filters.CharFilter(method='filter_search', label='Search')

    class Meta:
        model = Contact
        fields = ['status', 'priority', 'service', 'isRead', 'search']

    def filter_unless_all(self, queryset, name, value):
        if not value or value == "all":
            return queryset
        return queryset.filter(**{name: value})

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(full_name__icontains=term)
            | Q(email__icontains=term)
            | Q(company__icontains=term)
            | Q(subject__icontains=term)
        )
