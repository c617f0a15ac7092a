import csv
import io
from datetime import timedelta

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status

from catalog_admin.dashboard import compute_dashboard_stats, create_snapshot, growth_rate
from catalog_admin.models import DashboardSnapshot, round_half_up, percentage
from catalog_admin.tests.factories import TestDataFactory, AuthenticatedAPIClient


class RoundingTests(SimpleTestCase):

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.4), 2)

    def test_percentage(self):
        self.assertEqual(percentage(1, 3), 33)
        self.assertEqual(percentage(1, 8), 13)
        self.assertEqual(percentage(5, 0), 0)

    def test_growth_rate(self):
        self.assertEqual(growth_rate(10, None), 0.0)
        self.assertEqual(growth_rate(0, 0), 0.0)
        self.assertEqual(growth_rate(4, 0), 100.0)
        self.assertEqual(growth_rate(15, 10), 50.0)
        self.assertEqual(growth_rate(0, 10), -100.0)
        self.assertEqual(growth_rate(500, 1), 1000.0)


class DashboardStatsTests(TestCase):

    def test_empty_database(self):
        stats = compute_dashboard_stats()
        self.assertEqual(stats["overview"]["totalContacts"], 0)
        self.assertEqual(len(stats["contacts"]["trend"]), 7)
        self.assertTrue(all(day["count"] == 0 for day in stats["contacts"]["trend"]))

        snapshot = create_snapshot(stats)
        self.assertEqual(snapshot.completion_rate, 0)
        self.assertEqual(snapshot.avg_response_time, 0)

    def test_completion_and_response_rates(self):
        # 8 contacts: 1 closed, 3 replied
        TestDataFactory.create_contact(status="closed")
        for _ in range(3):
            TestDataFactory.create_contact(status="replied")
        for _ in range(4):
            TestDataFactory.create_contact()

        snapshot = create_snapshot(compute_dashboard_stats())
        self.assertEqual(snapshot.completion_rate, 13)
        self.assertEqual(snapshot.avg_response_time, 9)

    def test_status_priority_and_service_counts(self):
        TestDataFactory.create_contact(service="Technical Support", priority="high")
        TestDataFactory.create_contact(service="Technical Support", priority="high", is_read=True)
        TestDataFactory.create_contact(service="Other", status="in_progress")

        contacts = compute_dashboard_stats()["contacts"]
        self.assertEqual(contacts["total"], 3)
        self.assertEqual(contacts["new"], 2)
        self.assertEqual(contacts["inProgress"], 1)
        self.assertEqual(contacts["unread"], 2)
        self.assertEqual(contacts["highPriority"], 2)
        self.assertEqual(
            [(row["service"], row["count"]) for row in contacts["byService"]],
            [("Technical Support", 2), ("Other", 1)],
        )

    def test_seven_day_trend_oldest_first(self):
        now = timezone.now()
        TestDataFactory.create_contact(created_at=now)
        TestDataFactory.create_contact(created_at=now - timedelta(days=2))
        TestDataFactory.create_contact(created_at=now - timedelta(days=2))
        TestDataFactory.create_contact(created_at=now - timedelta(days=10))

        trend = compute_dashboard_stats(now=now)["contacts"]["trend"]
        today = timezone.localdate(now)
        self.assertEqual([day["date"] for day in trend], [(today - timedelta(days=6 - i)).isoformat() for i in range(7)])
        self.assertEqual(trend[-1]["count"], 1)
        self.assertEqual(trend[-3]["count"], 2)
        self.assertEqual(sum(day["count"] for day in trend), 3)

    def test_recent_contacts_window(self):
        now = timezone.now()
        TestDataFactory.create_contact(created_at=now - timedelta(days=5))
        TestDataFactory.create_contact(created_at=now - timedelta(days=45))
        self.assertEqual(compute_dashboard_stats(now=now)["contacts"]["recent"], 1)

    def test_products_by_category_and_breakdown(self):
        navbar, category, subcategory, _ = TestDataFactory.create_tree()
        TestDataFactory.create_product("Second", subcategory)
        stats = compute_dashboard_stats()
        self.assertEqual(stats["products"]["byCategory"][0], {"category": "Switches", "count": 2, "percentage": 100})
        self.assertEqual(
            stats["categories"]["breakdown"],
            [{"navbarCategory": "Networking", "categoriesCount": 1, "subcategoriesCount": 1}],
        )

    def test_growth_against_previous_snapshot(self):
        TestDataFactory.create_contact()
        TestDataFactory.create_contact()
        create_snapshot(compute_dashboard_stats())
        TestDataFactory.create_contact()
        self.assertEqual(compute_dashboard_stats()["growth"]["contacts"], 50.0)


class DashboardAPITests(TestCase):

    def setUp(self):
        self.admin = TestDataFactory.create_admin(username="dash")
        self.client = AuthenticatedAPIClient().authenticate_user(self.admin)

    def test_stats_requires_admin(self):
        response = AuthenticatedAPIClient().get("/api/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(DashboardSnapshot.objects.exists())

    def test_stats_saves_realtime_snapshot(self):
        TestDataFactory.create_contact()
        response = self.client.get("/api/dashboard/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["overview"]["totalContacts"], 1)
        snapshot = DashboardSnapshot.objects.get()
        self.assertEqual(snapshot.snapshot_type, "real-time")
        self.assertEqual(snapshot.created_by, "dash")

    def test_history_manual_and_cleanup(self):
        response = self.client.post("/api/dashboard/history/", {"type": "manual"})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["type"], "manual")

        old = create_snapshot(compute_dashboard_stats(), "daily")
        DashboardSnapshot.objects.filter(pk=old.pk).update(generated_at=timezone.now() - timedelta(days=40))

        response = self.client.get("/api/dashboard/history/", {"type": "all"})
        self.assertEqual(response.data["pagination"]["total"], 2)
        response = self.client.get("/api/dashboard/history/", {"type": "manual"})
        self.assertEqual(response.data["pagination"]["total"], 1)

        response = self.client.delete("/api/dashboard/history/", {"olderThan": 30})
        self.assertEqual(response.data["data"]["deletedCount"], 1)
        self.assertEqual(DashboardSnapshot.objects.count(), 1)

    def test_history_rejects_unknown_type(self):
        response = self.client.post("/api/dashboard/history/", {"type": "hourly"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_export_csv(self):
        TestDataFactory.create_contact(status="closed")
        create_snapshot(compute_dashboard_stats(), "daily", "dash")
        response = self.client.get("/api/dashboard/export/", {"format": "csv"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Type"], "text/csv")
        self.assertIn("attachment", response["Content-Disposition"])

        rows = list(csv.reader(io.StringIO(response.content.decode())))
        self.assertEqual(rows[0][0], "Generated At")
        self.assertIn("Completion Rate %", rows[0])
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][rows[0].index("Completion Rate %")], "100")

    def test_export_json_date_range(self):
        recent = create_snapshot(compute_dashboard_stats(), "daily")
        old = create_snapshot(compute_dashboard_stats(), "daily")
        DashboardSnapshot.objects.filter(pk=old.pk).update(generated_at=timezone.now() - timedelta(days=20))

        start = (timezone.localdate() - timedelta(days=3)).isoformat()
        response = self.client.get("/api/dashboard/export/", {"format": "json", "startDate": start})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["data"][0]["id"], recent.pk)

    def test_export_rejects_unknown_format(self):
        response = self.client.get("/api/dashboard/export/", {"format": "xml"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
