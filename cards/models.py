from django.db import models
from django.urls import reverse
from django.utils import timezone

from .utils.vcard_tools import ContactRecord

#########################
# ContactCard Model

# A contact that was saved to get a shareable link.
# Holds the same fields as the builder form, plus the short code used in
# /c/<shortcode>/ links and the browser session that created it.

# Fields:
# - shortcode: unique URL-safe identifier, allocated by cards.utils.card_store
# - session_id: creator's session identifier (used for "My cards")
# - photo: image data URL, stored as text so it can be emitted verbatim
# - first_name ... address_country: contact details, blank when unused


class ContactCard(models.Model):
    shortcode = models.CharField(max_length=32, unique=True, db_index=True)
    session_id = models.CharField(max_length=64, blank=True, default="", db_index=True)

    photo = models.TextField(blank=True, null=True)
    first_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100, blank=True, default="")
    title = models.CharField(max_length=150, blank=True, default="")
    organization = models.CharField(max_length=200, blank=True, default="")
    phone_mobile = models.CharField(max_length=50, blank=True, default="")
    phone_work = models.CharField(max_length=50, blank=True, default="")
    phone_fax = models.CharField(max_length=50, blank=True, default="")
    email_primary = models.CharField(max_length=254, blank=True, default="")
    email_secondary = models.CharField(max_length=254, blank=True, default="")
    website = models.CharField(max_length=500, blank=True, default="")
    linkedin = models.CharField(max_length=500, blank=True, default="")
    twitter = models.CharField(max_length=500, blank=True, default="")
    address_street = models.CharField(max_length=255, blank=True, default="")
    address_city = models.CharField(max_length=100, blank=True, default="")
    address_state = models.CharField(max_length=100, blank=True, default="")
    address_zip = models.CharField(max_length=20, blank=True, default="")
    address_country = models.CharField(max_length=100, blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        name = f"{self.first_name} {self.last_name}".strip() or "(unnamed)"
        return f"{name} [{self.shortcode}]"

    def get_absolute_url(self):
        return reverse("cards:share_page", args=[self.shortcode])

    def to_record(self):
        """Snapshot this card as an immutable ContactRecord."""
        return ContactRecord.from_mapping(
            {name: getattr(self, name) for name in RECORD_FIELDS}
        )


RECORD_FIELDS = [
    "photo",
    "first_name",
    "last_name",
    "title",
    "organization",
    "phone_mobile",
    "phone_work",
    "phone_fax",
    "email_primary",
    "email_secondary",
    "website",
    "linkedin",
    "twitter",
    "address_street",
    "address_city",
    "address_state",
    "address_zip",
    "address_country",
]


#########################
# CardEvent Model

# Append-only log of what visitors did with a shared card.
# Counted by analytics.queries.card_stats().

PAGE_VIEW = "page_view"
SAVE_CLICK = "save_click"
DOWNLOAD = "download"
QR_SCAN = "qr_scan"

EVENT_TYPE_CHOICES = [
    (PAGE_VIEW, "Page viewed"),
    (SAVE_CLICK, "Save clicked"),
    (DOWNLOAD, "Downloaded"),
    (QR_SCAN, "QR scanned"),
]
EVENT_TYPES = {value for value, _ in EVENT_TYPE_CHOICES}


class CardEvent(models.Model):
    card = models.ForeignKey(
        ContactCard, on_delete=models.CASCADE, related_name="events"
    )
    event_type = models.CharField(max_length=20, choices=EVENT_TYPE_CHOICES)
    user_agent = models.TextField(blank=True, null=True)
    ip_hash = models.CharField(max_length=64, blank=True, null=True)
    referrer = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["card", "event_type"], name="cards_event_card_type_idx"),
        ]

    def __str__(self):
        return f"{self.get_event_type_display()} on {self.card.shortcode}"
