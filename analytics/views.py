# analytics/views.py
from django.http import Http404
from django.shortcuts import render
from django.views.decorators.http import require_GET

from cards.utils.card_store import get_card

from . import queries


@require_GET
def card_dashboard(request, shortcode):
    card = get_card(shortcode)
    if card is None:
        raise Http404("vCard not found")

    stats = queries.card_stats(card)
    events = queries.recent_events(card, limit=10)
    daily = queries.daily_event_counts(card, days=30)

    ctx = {
        "card": card,
        "stats": stats,
        "recent_events": events,
        # rendered with |json_script for the chart
        "daily": daily,
    }
    return render(request, "analytics/card_dashboard.html", ctx)
