"""Utility subpackage for cards.

The vCard helpers are exposed at the package level so callers can
import `from cards.utils import serialize, ContactRecord`.
"""

from .vcard_tools import ContactRecord, VCardOptions, serialize

__all__ = ["ContactRecord", "VCardOptions", "serialize"]
