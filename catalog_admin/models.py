from decimal import Decimal, ROUND_HALF_UP

from django.db import models
from django.utils import timezone

from .slugs import apply_slug


def round_half_up(value):
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(part, total):
    if not total:
        return 0
    return round_half_up(part / total * 100)


class SluggedModel(models.Model):
    """
    Base for rows whose slug follows their name. The stored name/slug pair is
    remembered on load so save() can tell whether the caller renamed the row,
    touched the slug, or both.
    """

    class Meta:
        abstract = True

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        stored = dict(zip(field_names, values))
        instance._loaded_values = {"name": stored.get("name"), "slug": stored.get("slug")}
        return instance

    def save(self, *args, **kwargs):
        apply_slug(self)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "name" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"slug"}
        super().save(*args, **kwargs)
        self._loaded_values = {"name": self.name, "slug": self.slug}


class NavbarCategory(SluggedModel):
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=120, unique=True, blank=True)
    description = models.TextField(blank=True, default="")
    order = models.IntegerField(default=0, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "created_at"]
        verbose_name_plural = "navbar categories"

    def __str__(self):
        return self.name


class Category(SluggedModel):
    name = models.CharField(max_length=150, db_index=True)
    slug = models.SlugField(max_length=170, unique=True, blank=True)
    navbar_category = models.ForeignKey(NavbarCategory, on_delete=models.CASCADE, related_name="categories")
    description = models.TextField(blank=True, default="")
    image = models.CharField(max_length=500, blank=True, default="")
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class SubCategory(SluggedModel):
    name = models.CharField(max_length=150, db_index=True)
    slug = models.SlugField(max_length=170, unique=True, blank=True)
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="subcategories")
    description = models.TextField(blank=True, default="")
    image = models.CharField(max_length=500, blank=True, default="")
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "subcategories"

    def __str__(self):
        return self.name


class Product(SluggedModel):
    name = models.CharField(max_length=200, db_index=True)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    description = models.TextField()
    key_features = models.JSONField(default=list, blank=True)
    # features joined by newlines, for search
    key_features_text = models.TextField(blank=True, default="", editable=False)
    image1 = models.CharField(max_length=500)
    image2 = models.CharField(max_length=500, blank=True, default="")
    image3 = models.CharField(max_length=500, blank=True, default="")
    image4 = models.CharField(max_length=500, blank=True, default="")
    navbar_category = models.ForeignKey(NavbarCategory, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="products")
    subcategory = models.ForeignKey(
        SubCategory, on_delete=models.CASCADE, related_name="products", null=True, blank=True
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.key_features_text = "\n".join(str(feature) for feature in (self.key_features or []))
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "key_features" in update_fields:
            kwargs["update_fields"] = set(update_fields) | {"key_features_text"}
        super().save(*args, **kwargs)

    @property
    def images(self):
        return [img for img in (self.image1, self.image2, self.image3, self.image4) if img]


SERVICE_CHOICES = [
    ("Network Infrastructure", "Network Infrastructure"),
    ("Wireless Solutions", "Wireless Solutions"),
    ("Security Systems", "Security Systems"),
    ("Cloud Services", "Cloud Services"),
    ("Technical Support", "Technical Support"),
    ("Partnership", "Partnership"),
    ("Other", "Other"),
]

# Services whose enquiries are triaged first
HIGH_PRIORITY_SERVICES = {"Technical Support", "Security Systems", "Partnership", "Cloud Services"}


class Contact(models.Model):
    STATUS_CHOICES = [
        ("new", "New"),
        ("replied", "Replied"),
        ("in_progress", "In Progress"),
        ("closed", "Closed"),
    ]
    PRIORITY_CHOICES = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
    ]

    full_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254, db_index=True)
    phone = models.CharField(max_length=20)
    company = models.CharField(max_length=200, blank=True, default="")
    service = models.CharField(max_length=50, choices=SERVICE_CHOICES, db_index=True)
    subject = models.CharField(max_length=200)
    message = models.TextField(max_length=2000)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="new", db_index=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="medium", db_index=True)
    source = models.CharField(max_length=100, default="Website Form")
    is_read = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.full_name} <{self.email}>"

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        super().save(*args, **kwargs)

    @staticmethod
    def priority_for_service(service):
        return "high" if service in HIGH_PRIORITY_SERVICES else "medium"


class DashboardSnapshot(models.Model):
    TYPE_CHOICES = [
        ("daily", "Daily"),
        ("weekly", "Weekly"),
        ("monthly", "Monthly"),
        ("real-time", "Real-time"),
        ("manual", "Manual"),
    ]

    total_contacts = models.PositiveIntegerField(default=0)
    total_products = models.PositiveIntegerField(default=0)
    total_navbar_categories = models.PositiveIntegerField(default=0)
    total_categories = models.PositiveIntegerField(default=0)
    total_subcategories = models.PositiveIntegerField(default=0)

    new_contacts = models.PositiveIntegerField(default=0)
    replied_contacts = models.PositiveIntegerField(default=0)
    in_progress_contacts = models.PositiveIntegerField(default=0)
    closed_contacts = models.PositiveIntegerField(default=0)
    unread_contacts = models.PositiveIntegerField(default=0)
    high_priority_contacts = models.PositiveIntegerField(default=0)

    contacts_growth = models.FloatField(default=0)
    products_growth = models.FloatField(default=0)
    categories_growth = models.FloatField(default=0)

    service_distribution = models.JSONField(default=list, blank=True)
    contacts_trend = models.JSONField(default=list, blank=True)
    products_trend = models.JSONField(default=list, blank=True)
    products_by_category = models.JSONField(default=list, blank=True)
    categories_breakdown = models.JSONField(default=list, blank=True)

    avg_response_time = models.PositiveIntegerField(default=0)
    completion_rate = models.PositiveIntegerField(default=0)

    generated_at = models.DateTimeField(default=timezone.now, db_index=True)
    period_start = models.DateTimeField()
    period_end = models.DateTimeField()
    snapshot_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default="real-time", db_index=True)
    created_by = models.CharField(max_length=150, default="system")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-generated_at"]

    def __str__(self):
        return f"{self.snapshot_type} snapshot @ {self.generated_at:%Y-%m-%d %H:%M}"

    def save(self, *args, **kwargs):
        self.completion_rate = percentage(self.closed_contacts, self.total_contacts)
        if self.total_contacts:
            self.avg_response_time = round_half_up(self.replied_contacts / self.total_contacts * 24)
        else:
            self.avg_response_time = 0
        super().save(*args, **kwargs)

    @property
    def summary(self):
        return {
            "totalItems": self.total_contacts + self.total_products + self.total_categories,
            "activeContacts": self.new_contacts + self.in_progress_contacts,
            "responseRate": percentage(self.replied_contacts + self.closed_contacts, self.total_contacts),
            "highPriorityRate": percentage(self.high_priority_contacts, self.total_contacts),
        }
