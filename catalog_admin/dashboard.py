# Standard Library
import csv
import logging
from datetime import datetime, time, timedelta

# Django
from django.db import DatabaseError
from django.db.models import Count
from django.http import HttpResponse
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .models import NavbarCategory, Category, SubCategory, Product, Contact, DashboardSnapshot, percentage
from .permissions import IsAdminToken
from .serializers import DashboardSnapshotSerializer
from .utilities import _to_int

logger = logging.getLogger(__name__)

TREND_DAYS = 7
RECENT_DAYS = 30
TOP_CATEGORIES = 10
GROWTH_FLOOR, GROWTH_CEILING = -100.0, 1000.0
SNAPSHOT_TYPES = {value for value, _ in DashboardSnapshot.TYPE_CHOICES}


def day_bounds(day):
    """[start, end) of a calendar day in the current time zone."""
    start = timezone.make_aware(datetime.combine(day, time.min))
    return start, start + timedelta(days=1)


def daily_trend(queryset, today, days=TREND_DAYS, field="created_at"):
    """Per-day counts for the `days` calendar days ending today, oldest first."""
    trend = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        start, end = day_bounds(day)
        count = queryset.filter(**{f"{field}__gte": start, f"{field}__lt": end}).count()
        trend.append({"date": day.isoformat(), "count": count})
    return trend


def growth_rate(current, previous):
    """
    Percent change from the previous snapshot's figure, one decimal, clamped
    to [-100, 1000]. No previous snapshot: 0. Previous figure 0: 100 when
    something appeared since, else 0.
    """
    if previous is None:
        return 0.0
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    change = round((current - previous) / previous * 100, 1)
    return max(GROWTH_FLOOR, min(GROWTH_CEILING, change))


def compute_dashboard_stats(now=None):
    now = now or timezone.now()
    today = timezone.localdate(now)

    contacts = Contact.objects.all()
    total_contacts = contacts.count()
    by_status = {
        row["status"]: row["count"]
        for row in contacts.order_by().values("status").annotate(count=Count("id"))
    }
    by_service = [
        {
            "service": row["service"],
            "count": row["count"],
            "percentage": percentage(row["count"], total_contacts),
        }
        for row in contacts.values("service").annotate(count=Count("id")).order_by("-count", "service")
    ]

    total_products = Product.objects.count()
    by_category = [
        {
            "category": row["category__name"] or "Uncategorized",
            "count": row["count"],
            "percentage": percentage(row["count"], total_products),
        }
        for row in (
            Product.objects.values("category__name")
            .annotate(count=Count("id"))
            .order_by("-count", "category__name")[:TOP_CATEGORIES]
        )
    ]

    breakdown = [
        {
            "navbarCategory": row["name"],
            "categoriesCount": row["categories_count"],
            "subcategoriesCount": row["subcategories_count"],
        }
        for row in (
            NavbarCategory.objects
            .annotate(
                categories_count=Count("categories", distinct=True),
                subcategories_count=Count("categories__subcategories", distinct=True),
            )
            .order_by("order", "name")
            .values("name", "categories_count", "subcategories_count")
        )
    ]

    total_navbar = NavbarCategory.objects.count()
    total_categories = Category.objects.count()
    total_subcategories = SubCategory.objects.count()

    previous = DashboardSnapshot.objects.filter(generated_at__lte=now).order_by("-generated_at").first()

    return {
        "overview": {
            "totalContacts": total_contacts,
            "totalProducts": total_products,
            "totalNavbarCategories": total_navbar,
            "totalCategories": total_categories,
            "totalSubcategories": total_subcategories,
        },
        "contacts": {
            "total": total_contacts,
            "new": by_status.get("new", 0),
            "replied": by_status.get("replied", 0),
            "inProgress": by_status.get("in_progress", 0),
            "closed": by_status.get("closed", 0),
            "unread": contacts.filter(is_read=False).count(),
            "highPriority": contacts.filter(priority="high").count(),
            "recent": contacts.filter(created_at__gte=now - timedelta(days=RECENT_DAYS)).count(),
            "byService": by_service,
            "trend": daily_trend(Contact.objects.all(), today),
        },
        "products": {
            "total": total_products,
            "active": Product.objects.filter(is_active=True).count(),
            "byCategory": by_category,
            "trend": daily_trend(Product.objects.all(), today),
        },
        "categories": {
            "navbar": total_navbar,
            "categories": total_categories,
            "subcategories": total_subcategories,
            "breakdown": breakdown,
        },
        "growth": {
            "contacts": growth_rate(total_contacts, previous.total_contacts if previous else None),
            "products": growth_rate(total_products, previous.total_products if previous else None),
            "categories": growth_rate(total_categories, previous.total_categories if previous else None),
        },
        "generatedAt": now.isoformat(),
    }


def create_snapshot(stats, snapshot_type="real-time", created_by="system", now=None):
    """Persist a stats dict as a DashboardSnapshot covering today."""
    now = now or timezone.now()
    period_start, next_day = day_bounds(timezone.localdate(now))
    contacts = stats["contacts"]
    overview = stats["overview"]

    return DashboardSnapshot.objects.create(
        total_contacts=overview["totalContacts"],
        total_products=overview["totalProducts"],
        total_navbar_categories=overview["totalNavbarCategories"],
        total_categories=overview["totalCategories"],
        total_subcategories=overview["totalSubcategories"],
        new_contacts=contacts["new"],
        replied_contacts=contacts["replied"],
        in_progress_contacts=contacts["inProgress"],
        closed_contacts=contacts["closed"],
        unread_contacts=contacts["unread"],
        high_priority_contacts=contacts["highPriority"],
        contacts_growth=stats["growth"]["contacts"],
        products_growth=stats["growth"]["products"],
        categories_growth=stats["growth"]["categories"],
        service_distribution=[
            {"serviceName": row["service"] or "Unknown", "count": row["count"], "percentage": row["percentage"]}
            for row in contacts["byService"]
        ],
        contacts_trend=contacts["trend"],
        products_trend=stats["products"]["trend"],
        products_by_category=stats["products"]["byCategory"],
        categories_breakdown=stats["categories"]["breakdown"],
        generated_at=now,
        period_start=period_start,
        period_end=next_day - timedelta(microseconds=1),
        snapshot_type=snapshot_type,
        created_by=created_by,
    )


def _admin_name(request):
    token = request.auth
    return (token.get("username") if token is not None else None) or "admin"


class DashboardStatsAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        stats = compute_dashboard_stats()
        try:
            snapshot = create_snapshot(stats, "real-time", _admin_name(request))
            stats["snapshotId"] = snapshot.pk
            stats["completionRate"] = snapshot.completion_rate
            stats["avgResponseTime"] = snapshot.avg_response_time
        except DatabaseError:
            # stats are still served without a history row
            logger.exception("Saving dashboard snapshot failed")
        return Response({"success": True, "data": stats})


class DashboardHistoryAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        snapshot_type = request.query_params.get("type", "real-time")
        limit = min(max(_to_int(request.query_params.get("limit"), 10), 1), 100)
        page = max(_to_int(request.query_params.get("page"), 1), 1)

        snapshots = DashboardSnapshot.objects.all()
        if snapshot_type != "all":
            snapshots = snapshots.filter(snapshot_type=snapshot_type)
        total = snapshots.count()
        offset = (page - 1) * limit
        items = snapshots.order_by("-generated_at", "-id")[offset:offset + limit]

        return Response({
            "success": True,
            "data": DashboardSnapshotSerializer(items, many=True).data,
            "pagination": {
                "total": total,
                "page": page,
                "limit": limit,
                "pages": (total + limit - 1) // limit,
            },
        })

    def post(self, request):
        snapshot_type = request.data.get("type", "manual")
        if snapshot_type not in SNAPSHOT_TYPES:
            return Response({"success": False, "error": "Invalid snapshot type"}, status=status.HTTP_400_BAD_REQUEST)

        snapshot = create_snapshot(compute_dashboard_stats(), snapshot_type, _admin_name(request))
        return Response({
            "success": True,
            "message": "Snapshot created successfully",
            "data": DashboardSnapshotSerializer(snapshot).data,
        }, status=status.HTTP_201_CREATED)

    def delete(self, request):
        """Drop snapshots older than `olderThan` days (default 30)."""
        older_than = _to_int(request.data.get("olderThan") or request.query_params.get("olderThan"), 30)
        if older_than < 1:
            return Response({"success": False, "error": "olderThan must be at least 1 day"}, status=status.HTTP_400_BAD_REQUEST)

        cutoff = timezone.now() - timedelta(days=older_than)
        old = DashboardSnapshot.objects.filter(generated_at__lt=cutoff)
        snapshot_type = request.data.get("type") or request.query_params.get("type")
        if snapshot_type and snapshot_type != "all":
            old = old.filter(snapshot_type=snapshot_type)
        deleted, _ = old.delete()

        logger.info("Removed %d dashboard snapshots older than %d days", deleted, older_than)
        return Response({
            "success": True,
            "message": f"Deleted {deleted} snapshots older than {older_than} days",
            "data": {"deletedCount": deleted},
        })


EXPORT_COLUMNS = [
    ("Generated At", lambda s: s.generated_at.isoformat()),
    ("Type", lambda s: s.snapshot_type),
    ("Total Contacts", lambda s: s.total_contacts),
    ("Total Products", lambda s: s.total_products),
    ("Total Categories", lambda s: s.total_categories),
    ("New Contacts", lambda s: s.new_contacts),
    ("Replied Contacts", lambda s: s.replied_contacts),
    ("Unread Contacts", lambda s: s.unread_contacts),
    ("High Priority Contacts", lambda s: s.high_priority_contacts),
    ("Contacts Growth %", lambda s: s.contacts_growth),
    ("Products Growth %", lambda s: s.products_growth),
    ("Completion Rate %", lambda s: s.completion_rate),
    ("Avg Response Time (hrs)", lambda s: s.avg_response_time),
    ("Created By", lambda s: s.created_by),
]


def _parse_bound(value, end_of_day=False):
    if not value:
        return None
    moment = parse_datetime(value)
    if moment is None:
        day = parse_date(value)
        if day is None:
            raise ValueError(value)
        start, next_day = day_bounds(day)
        return next_day if end_of_day else start
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return moment


class DashboardExportAPIView(APIView):
    permission_classes = [IsAdminToken]

    def get(self, request):
        params = request.query_params
        export_format = (params.get("format") or "json").lower()
        if export_format not in ("json", "csv"):
            return Response({"success": False, "error": "format must be json or csv"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            start = _parse_bound(params.get("startDate"))
            end = _parse_bound(params.get("endDate"), end_of_day=True)
        except ValueError:
            return Response({"success": False, "error": "Invalid date"}, status=status.HTTP_400_BAD_REQUEST)

        snapshots = DashboardSnapshot.objects.all()
        snapshot_type = params.get("type", "all")
        if snapshot_type != "all":
            snapshots = snapshots.filter(snapshot_type=snapshot_type)
        if start:
            snapshots = snapshots.filter(generated_at__gte=start)
        if end:
            snapshots = snapshots.filter(generated_at__lt=end)
        limit = min(max(_to_int(params.get("limit"), 100), 1), 1000)
        snapshots = list(snapshots.order_by("-generated_at", "-id")[:limit])

        stamp = timezone.localdate().isoformat()
        if export_format == "csv":
            response = HttpResponse(content_type="text/csv")
            response["Content-Disposition"] = f'attachment; filename="dashboard-export-{stamp}.csv"'
            writer = csv.writer(response)
            writer.writerow([header for header, _ in EXPORT_COLUMNS])
            for snapshot in snapshots:
                writer.writerow([value(snapshot) for _, value in EXPORT_COLUMNS])
            return response

        response = Response({
            "success": True,
            "data": DashboardSnapshotSerializer(snapshots, many=True).data,
            "exportedAt": timezone.now().isoformat(),
            "count": len(snapshots),
        })
        response["Content-Disposition"] = f'attachment; filename="dashboard-export-{stamp}.json"'
        return response
