"""
Per-visitor bookkeeping kept in the Django session.

Visitors don't log in. Each browser gets a random session id (stored on the
cards it creates) and a short list of the cards it saved, shown on the
"My cards" page.
"""

from typing import List, TypedDict

from django.utils import timezone

from .utils.shortcode import generate_session_id

SESSION_ID_KEY = "vcard_session_id"
SAVED_CARDS_KEY = "vcard_saved_cards"


class SavedCardInfo(TypedDict):
    id: int
    shortcode: str
    first_name: str
    last_name: str
    organization: str
    created_at: str


def get_session_id(request) -> str:
    session_id = request.session.get(SESSION_ID_KEY)
    if not session_id:
        session_id = generate_session_id()
        request.session[SESSION_ID_KEY] = session_id
    return session_id


def get_saved_cards(request) -> List[SavedCardInfo]:
    saved = request.session.get(SAVED_CARDS_KEY)
    if not isinstance(saved, list):
        return []
    return saved


def add_saved_card(request, card) -> None:
    """Remember a card for this visitor, newest first. Re-adding updates it in place."""
    info: SavedCardInfo = {
        "id": card.pk,
        "shortcode": card.shortcode,
        "first_name": card.first_name,
        "last_name": card.last_name,
        "organization": card.organization,
        "created_at": timezone.localtime(card.created_at).isoformat(),
    }
    cards = list(get_saved_cards(request))
    for i, existing in enumerate(cards):
        if existing.get("id") == card.pk:
            cards[i] = info
            break
    else:
        cards.insert(0, info)
    request.session[SAVED_CARDS_KEY] = cards


def remove_saved_card(request, shortcode) -> bool:
    cards = get_saved_cards(request)
    remaining = [c for c in cards if c.get("shortcode") != shortcode]
    request.session[SAVED_CARDS_KEY] = remaining
    return len(remaining) != len(cards)


def owns_card(request, shortcode) -> bool:
    return any(c.get("shortcode") == shortcode for c in get_saved_cards(request))
