from unittest.mock import patch

import pytest
from django.test import RequestFactory

from cards.models import PAGE_VIEW, QR_SCAN, CardEvent, ContactCard
from cards.utils.card_store import (
    MAX_SHORTCODE_ATTEMPTS,
    ShortCodeExhausted,
    get_card,
    get_record,
    record_event,
    save_card,
)
from cards.utils.shortcode import SHORTCODE_ALPHABET
from cards.utils.vcard_tools import ContactRecord, serialize


@pytest.mark.django_db
def test_save_card_allocates_shortcode(full_record_data):
    record = ContactRecord(**full_record_data)
    card = save_card(record, session_id="abc")

    assert len(card.shortcode) == 8
    assert all(ch in SHORTCODE_ALPHABET for ch in card.shortcode)
    assert card.session_id == "abc"
    assert ContactCard.objects.count() == 1


@pytest.mark.django_db
def test_saved_card_round_trips_to_same_vcard(full_record_data):
    record = ContactRecord(photo="data:image/png;base64,AAAA", **full_record_data)
    card = save_card(record)

    assert get_record(card.shortcode) == record
    assert serialize(get_record(card.shortcode)) == serialize(record)


@pytest.mark.django_db
def test_save_card_retries_on_collision(card):
    codes = iter([card.shortcode, "freshOne"])
    with patch("cards.utils.card_store.generate_shortcode", lambda: next(codes)):
        new_card = save_card(ContactRecord(first_name="Jane"))
    assert new_card.shortcode == "freshOne"
    assert ContactCard.objects.count() == 2


@pytest.mark.django_db
def test_save_card_gives_up_after_max_attempts(card):
    with patch("cards.utils.card_store.generate_shortcode", return_value=card.shortcode):
        with pytest.raises(ShortCodeExhausted):
            save_card(ContactRecord(first_name="Jane"))
    assert ContactCard.objects.count() == 1
    assert MAX_SHORTCODE_ATTEMPTS == 5


@pytest.mark.django_db
def test_get_card_not_found_returns_none():
    assert get_card("missing1") is None
    assert get_card("") is None
    assert get_record("missing1") is None


@pytest.mark.django_db
def test_get_card_rejects_malformed_shortcode_without_query(django_assert_num_queries):
    with django_assert_num_queries(0):
        assert get_card("bad/code") is None
        assert get_card("a b") is None
        assert get_card(None) is None


@pytest.mark.django_db
def test_record_event_without_request(card):
    event = record_event(card, PAGE_VIEW)
    assert event.card == card
    assert event.event_type == PAGE_VIEW
    assert event.user_agent is None
    assert event.ip_hash is None


@pytest.mark.django_db
def test_record_event_captures_request_details(card):
    request = RequestFactory().get(
        "/c/x/",
        HTTP_USER_AGENT="TestPhone/1.0",
        HTTP_REFERER="https://mail.example.com/",
        REMOTE_ADDR="203.0.113.9",
    )
    event = record_event(card, QR_SCAN, request)
    assert event.user_agent == "TestPhone/1.0"
    assert event.referrer == "https://mail.example.com/"
    assert len(event.ip_hash) == 64
    assert "203.0.113.9" not in event.ip_hash


@pytest.mark.django_db
def test_record_event_rejects_unknown_type(card):
    with pytest.raises(ValueError):
        record_event(card, "link_click")
    assert CardEvent.objects.count() == 0


@pytest.mark.django_db
def test_events_are_deleted_with_card(card):
    record_event(card, PAGE_VIEW)
    card.delete()
    assert CardEvent.objects.count() == 0
