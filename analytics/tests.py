from datetime import timedelta

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from analytics.queries import (
    card_stats,
    conversion_rate,
    daily_event_counts,
    recent_events,
)
from cards.models import DOWNLOAD, PAGE_VIEW, QR_SCAN, SAVE_CLICK, CardEvent, ContactCard


class ConversionRateTestCase(TestCase):
    """Test the conversion_rate helper."""

    def test_no_views_is_zero(self):
        self.assertEqual(conversion_rate(0, 3, 2), 0.0)

    def test_uses_larger_of_saves_and_downloads(self):
        self.assertEqual(conversion_rate(10, 2, 2), 20.0)
        self.assertEqual(conversion_rate(10, 1, 3), 30.0)

    def test_rounded_to_one_decimal(self):
        self.assertEqual(conversion_rate(3, 1, 0), 33.3)


class CardStatsTestCase(TestCase):
    """Test card_stats, recent_events and daily_event_counts."""

    def setUp(self):
        self.card = ContactCard.objects.create(shortcode="stats001", first_name="Ann")
        self.other = ContactCard.objects.create(shortcode="stats002", first_name="Bob")

    def _events(self, card, event_type, n):
        for _ in range(n):
            CardEvent.objects.create(card=card, event_type=event_type)

    def test_empty_card(self):
        stats = card_stats(self.card)
        self.assertEqual(
            stats,
            {
                "page_views": 0,
                "save_clicks": 0,
                "downloads": 0,
                "qr_scans": 0,
                "conversion_rate": 0.0,
            },
        )

    def test_counts_by_type(self):
        self._events(self.card, PAGE_VIEW, 4)
        self._events(self.card, SAVE_CLICK, 1)
        self._events(self.card, DOWNLOAD, 1)
        self._events(self.card, QR_SCAN, 2)
        # Events of other cards don't count
        self._events(self.other, PAGE_VIEW, 5)

        stats = card_stats(self.card)
        self.assertEqual(stats["page_views"], 4)
        self.assertEqual(stats["save_clicks"], 1)
        self.assertEqual(stats["downloads"], 1)
        self.assertEqual(stats["qr_scans"], 2)
        self.assertEqual(stats["conversion_rate"], 25.0)

    def test_recent_events_newest_first_and_limited(self):
        now = timezone.now()
        for i in range(12):
            CardEvent.objects.create(
                card=self.card,
                event_type=PAGE_VIEW,
                created_at=now - timedelta(minutes=i),
            )

        events = recent_events(self.card)
        self.assertEqual(len(events), 10)
        self.assertEqual(events[0].created_at, now)
        self.assertTrue(
            all(a.created_at >= b.created_at for a, b in zip(events, events[1:]))
        )
        self.assertEqual(len(recent_events(self.card, limit=3)), 3)

    def test_daily_counts_cover_every_day(self):
        today = timezone.localdate()
        now = timezone.now()
        CardEvent.objects.create(card=self.card, event_type=PAGE_VIEW, created_at=now)
        CardEvent.objects.create(card=self.card, event_type=PAGE_VIEW, created_at=now)
        CardEvent.objects.create(
            card=self.card, event_type=PAGE_VIEW, created_at=now - timedelta(days=40)
        )

        daily = daily_event_counts(self.card, days=7, today=today)
        self.assertEqual(len(daily["labels"]), 7)
        self.assertEqual(daily["labels"][-1], today.isoformat())
        self.assertEqual(
            set(daily["series"]), {PAGE_VIEW, SAVE_CLICK, DOWNLOAD, QR_SCAN}
        )
        self.assertEqual(daily["series"][PAGE_VIEW][-1], 2)
        self.assertEqual(sum(daily["series"][PAGE_VIEW]), 2)
        self.assertEqual(sum(daily["series"][QR_SCAN]), 0)


class CardDashboardViewTestCase(TestCase):
    """Test the per-card analytics page."""

    def setUp(self):
        self.card = ContactCard.objects.create(
            shortcode="dash0001", first_name="Ann", last_name="Lee"
        )

    def test_dashboard_renders_stats(self):
        CardEvent.objects.create(card=self.card, event_type=PAGE_VIEW)
        CardEvent.objects.create(card=self.card, event_type=PAGE_VIEW)
        CardEvent.objects.create(card=self.card, event_type=SAVE_CLICK)

        response = self.client.get(
            reverse("analytics:card_dashboard", args=[self.card.shortcode])
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["stats"]["page_views"], 2)
        self.assertEqual(response.context["stats"]["conversion_rate"], 50.0)
        self.assertContains(response, "Recent Activity")
        self.assertContains(response, "Save clicked")
        self.assertContains(response, 'id="daily-data"')

    def test_dashboard_without_events(self):
        response = self.client.get(
            reverse("analytics:card_dashboard", args=[self.card.shortcode])
        )
        self.assertContains(response, "No activity yet.")

    def test_dashboard_does_not_count_as_view(self):
        self.client.get(reverse("analytics:card_dashboard", args=[self.card.shortcode]))
        self.assertEqual(CardEvent.objects.count(), 0)

    def test_unknown_card_404(self):
        response = self.client.get(
            reverse("analytics:card_dashboard", args=["missing1"])
        )
        self.assertEqual(response.status_code, 404)
