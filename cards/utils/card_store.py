"""
Storage for shared cards and their visitor events.

Cards are stored under a short code that appears in share links
(/c/<shortcode>/). Events are append-only and feed analytics.queries.
"""

import logging
from dataclasses import asdict

from django.db import IntegrityError, transaction

from utils.security import hash_client_ip

from ..models import EVENT_TYPES, CardEvent, ContactCard
from .shortcode import generate_shortcode, is_valid_shortcode
from .vcard_tools import ContactRecord

logger = logging.getLogger(__name__)

MAX_SHORTCODE_ATTEMPTS = 5


class ShortCodeExhausted(Exception):
    """Raised when no unused short code could be allocated."""


def save_card(record: ContactRecord, session_id=None) -> ContactCard:
    """
    Store a contact under a freshly allocated short code.

    Short codes are random; on the rare collision with an existing card the
    unique constraint fails and another code is tried.

    Raises:
        ShortCodeExhausted: if MAX_SHORTCODE_ATTEMPTS codes all collided
    """
    values = asdict(record)
    for attempt in range(1, MAX_SHORTCODE_ATTEMPTS + 1):
        shortcode = generate_shortcode()
        try:
            with transaction.atomic():
                card = ContactCard.objects.create(
                    shortcode=shortcode, session_id=session_id or "", **values
                )
        except IntegrityError:
            logger.warning(
                f"Short code collision on {shortcode} (attempt {attempt})"
            )
            continue
        logger.info(f"Saved contact card {card.shortcode}")
        return card

    logger.error(
        f"Could not allocate a short code after {MAX_SHORTCODE_ATTEMPTS} attempts"
    )
    raise ShortCodeExhausted(
        f"No free short code after {MAX_SHORTCODE_ATTEMPTS} attempts"
    )


def get_card(shortcode):
    """Return the card stored under `shortcode`, or None if there is none."""
    if not is_valid_shortcode(shortcode):
        return None
    return ContactCard.objects.filter(shortcode=shortcode).first()


def get_record(shortcode):
    """Return the ContactRecord stored under `shortcode`, or None."""
    card = get_card(shortcode)
    return card.to_record() if card else None


def record_event(card, event_type, request=None) -> CardEvent:
    """
    Append an event for a card.

    When a request is given, the user agent, referrer and a salted hash of
    the client IP are stored with the event.

    Raises:
        ValueError: for an event type outside EVENT_TYPE_CHOICES
    """
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown card event type: {event_type!r}")

    user_agent = referrer = ip_hash = None
    if request is not None:
        user_agent = request.META.get("HTTP_USER_AGENT") or None
        referrer = request.META.get("HTTP_REFERER") or None
        ip_hash = hash_client_ip(request)

    return CardEvent.objects.create(
        card=card,
        event_type=event_type,
        user_agent=user_agent,
        referrer=referrer,
        ip_hash=ip_hash,
    )
