# --- IMPORTS ---
from datetime import date, timedelta
from typing import Any, Dict, List, TypedDict

from django.db.models import Count, Q
from django.db.models.functions import TruncDate
from django.utils import timezone

from cards.models import (
    DOWNLOAD,
    EVENT_TYPE_CHOICES,
    PAGE_VIEW,
    QR_SCAN,
    SAVE_CLICK,
    CardEvent,
)


class CardStats(TypedDict):
    page_views: int
    save_clicks: int
    downloads: int
    qr_scans: int
    conversion_rate: float


def conversion_rate(page_views: int, save_clicks: int, downloads: int) -> float:
    """
    Percentage of views that ended with the visitor taking the contact.

    Saving from the share page logs both a save_click and a download, so the
    larger of the two counts is used to avoid counting one save twice.
    Rounded to one decimal; 0.0 when there are no views.
    """
    if page_views <= 0:
        return 0.0
    return round(100.0 * max(save_clicks, downloads) / page_views, 1)


def card_stats(card) -> CardStats:
    """Event counts for one card plus its conversion rate."""
    counts = CardEvent.objects.filter(card=card).aggregate(
        page_views=Count("id", filter=Q(event_type=PAGE_VIEW)),
        save_clicks=Count("id", filter=Q(event_type=SAVE_CLICK)),
        downloads=Count("id", filter=Q(event_type=DOWNLOAD)),
        qr_scans=Count("id", filter=Q(event_type=QR_SCAN)),
    )
    return {
        "page_views": counts["page_views"],
        "save_clicks": counts["save_clicks"],
        "downloads": counts["downloads"],
        "qr_scans": counts["qr_scans"],
        "conversion_rate": conversion_rate(
            counts["page_views"], counts["save_clicks"], counts["downloads"]
        ),
    }


def recent_events(card, limit=10) -> List[CardEvent]:
    """Newest events first."""
    return list(
        CardEvent.objects.filter(card=card).order_by("-created_at", "-id")[:limit]
    )


def daily_event_counts(card, days=30, today: date | None = None) -> Dict[str, Any]:
    """
    Events per day over the last `days` days (today included), by type.

    Returns:
        {"labels": ["YYYY-MM-DD", ...],
         "series": {"page_view": [..], "save_click": [..], ...}}
    Every day in the window is present, days without events count 0.
    """
    today = today or timezone.localdate()
    start = today - timedelta(days=days - 1)
    labels = [start + timedelta(days=i) for i in range(days)]
    index = {d: i for i, d in enumerate(labels)}
    series = {event_type: [0] * days for event_type, _ in EVENT_TYPE_CHOICES}

    rows = (
        CardEvent.objects.filter(card=card, created_at__date__gte=start)
        .annotate(day=TruncDate("created_at"))
        .values("day", "event_type")
        .annotate(n=Count("id"))
    )
    for row in rows:
        i = index.get(row["day"])
        if i is not None and row["event_type"] in series:
            series[row["event_type"]][i] += row["n"]

    return {"labels": [d.isoformat() for d in labels], "series": series}
