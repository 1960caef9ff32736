import secrets
import string

from django.conf import settings

# URL-safe alphabet, same characters as nanoid's default
SHORTCODE_ALPHABET = string.ascii_letters + string.digits + "_-"
SESSION_ID_LENGTH = 24


def generate_shortcode(length=None):
    """Return a random URL-safe short code for a share link."""
    if length is None:
        length = getattr(settings, "CARD_SHORTCODE_LENGTH", 8)
    return "".join(secrets.choice(SHORTCODE_ALPHABET) for _ in range(length))


def generate_session_id():
    """Return an identifier for a visitor's browser session."""
    return generate_shortcode(SESSION_ID_LENGTH)


def is_valid_shortcode(value):
    return bool(value) and all(ch in SHORTCODE_ALPHABET for ch in value)
