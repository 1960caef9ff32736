from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from cards.models import PAGE_VIEW, CardEvent, ContactCard
from cards.utils.vcard_tools import serialize


@pytest.fixture
def two_cards(db):
    now = timezone.now()
    older = ContactCard.objects.create(
        shortcode="older001", first_name="Ann", last_name="Lee", created_at=now - timedelta(hours=1)
    )
    newer = ContactCard.objects.create(
        shortcode="newer001", first_name="Bob", organization="Acme", created_at=now
    )
    return older, newer


def test_download_vcards_action(admin_client, two_cards):
    older, newer = two_cards
    response = admin_client.post(
        reverse("admin:cards_contactcard_changelist"),
        {"action": "download_vcards", "_selected_action": [older.pk, newer.pk]},
    )
    assert response.status_code == 200
    assert response["Content-Type"] == "text/vcard; charset=utf-8"
    assert response["Content-Disposition"] == 'attachment; filename="contacts.vcf"'
    # Newest first, as the changelist orders them
    expected = serialize(newer.to_record()) + serialize(older.to_record())
    assert response.content.decode("utf-8") == expected


def test_contactcard_changelist_shows_share_link(admin_client, two_cards):
    response = admin_client.get(reverse("admin:cards_contactcard_changelist"))
    assert response.status_code == 200
    assert b'href="/c/newer001/"' in response.content


def test_contactcard_change_page_lists_events(admin_client, two_cards):
    older, _ = two_cards
    CardEvent.objects.create(card=older, event_type=PAGE_VIEW, user_agent="TestAgent/1.0")
    response = admin_client.get(reverse("admin:cards_contactcard_change", args=[older.pk]))
    assert response.status_code == 200
    assert b"TestAgent/1.0" in response.content


def test_cardevent_admin_is_read_only(admin_client, two_cards):
    older, _ = two_cards
    CardEvent.objects.create(card=older, event_type=PAGE_VIEW)
    response = admin_client.get(reverse("admin:cards_cardevent_changelist"))
    assert response.status_code == 200
    assert b"Page viewed" in response.content
    response = admin_client.get(reverse("admin:cards_cardevent_add"))
    assert response.status_code == 403
