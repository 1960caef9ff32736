import base64
import logging

from django.conf import settings
from django.contrib import messages
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import session
from .forms import ACTION_DOWNLOAD, ACTION_PREVIEW, ACTION_SHARE, ContactCardForm
from .models import DOWNLOAD, PAGE_VIEW, QR_SCAN, SAVE_CLICK
from .utils.card_store import ShortCodeExhausted, get_card, record_event, save_card
from .utils.vcard_tools import (
    VCARD_CONTENT_TYPE,
    generate_url_qr,
    generate_vcard_qr,
    qr_filename,
    serialize,
    vcard_filename,
)

logger = logging.getLogger(__name__)


def _get_card_or_404(shortcode):
    card = get_card(shortcode)
    if card is None:
        raise Http404("Contact not found")
    return card


def _vcard_response(record):
    response = HttpResponse(serialize(record), content_type=VCARD_CONTENT_TYPE)
    response["Content-Disposition"] = (
        f'attachment; filename="{vcard_filename(record)}"'
    )
    return response


def _share_url(request, card):
    site_url = getattr(settings, "SITE_URL", "")
    path = reverse("cards:share_page", args=[card.shortcode])
    if site_url:
        return f"{site_url.rstrip('/')}{path}"
    return request.build_absolute_uri(path)


def _track(card, event_type, request):
    """Record a visitor event. A failed insert must not stop the visitor getting the card."""
    try:
        record_event(card, event_type, request)
    except Exception:
        logger.exception(f"Failed to record {event_type} for card {card.shortcode}")


#########################
# builder() View

# The card builder: contact form, live preview, vCard text for copying and
# a QR code of the photo-less vCard.
# The submit button's `action` value picks what happens on POST:
# - preview: re-render with the preview (default)
# - download: respond with the .vcf file
# - share: store the card and go to its share link page
#
# GET ?load=<shortcode> prefills the form from a card this visitor saved.


@require_http_methods(["GET", "POST"])
def builder(request):
    action = request.POST.get("action", ACTION_PREVIEW)
    record = None

    if request.method == "POST":
        form = ContactCardForm(request.POST, request.FILES, action=action)
        if form.is_valid():
            record = form.to_record()

            if form.action == ACTION_DOWNLOAD:
                return _vcard_response(record)

            if form.action == ACTION_SHARE:
                return _create_share_link(request, form, record)

            # Re-bind so the hidden photo field carries the processed upload
            data = request.POST.copy()
            data["photo"] = record.photo or ""
            data.pop("remove_photo", None)
            form = ContactCardForm(data, action=ACTION_PREVIEW)
            form.is_valid()
    else:
        initial = {}
        shortcode = request.GET.get("load")
        if shortcode:
            card = get_card(shortcode)
            if card is not None and session.owns_card(request, shortcode):
                initial = ContactCardForm.initial_from_card(card)
                record = card.to_record()
            else:
                messages.warning(request, "That card could not be loaded.")
        form = ContactCardForm(initial=initial)

    context = {"form": form, "record": record}
    if record is not None:
        context["vcard_text"] = serialize(record)
        if record.is_nameable:
            qr_png = generate_vcard_qr(record)
            context["qr_base64"] = base64.b64encode(qr_png).decode("utf-8")
    return render(request, "cards/builder.html", context)


def _create_share_link(request, form, record):
    # A card loaded from storage keeps its existing link
    source = form.cleaned_data.get("source_shortcode")
    if source and session.owns_card(request, source):
        card = get_card(source)
        if card is not None:
            return redirect("cards:share_link", shortcode=card.shortcode)

    try:
        card = save_card(record, session_id=session.get_session_id(request))
    except ShortCodeExhausted:
        messages.error(request, "Failed to create share link. Please try again.")
        return render(request, "cards/builder.html", {"form": form, "record": record})

    session.add_saved_card(request, card)
    return redirect("cards:share_link", shortcode=card.shortcode)


@require_GET
def share_link(request, shortcode):
    """Show the tracked share link for a stored card, with a ready-made text message."""
    card = _get_card_or_404(shortcode)
    share_url = _share_url(request, card)
    sms_message = (
        f"Hi! This is {card.first_name} from {card.organization or 'our organization'}. "
        f"Save my contact info here: {share_url}"
    )
    return render(
        request,
        "cards/share_link.html",
        {"card": card, "share_url": share_url, "sms_message": sms_message},
    )


#########################
# share_page() View

# Public landing page for a shared card (/c/<shortcode>/).
# Every load counts as a page_view; arriving from the card's QR code
# (?src=qr) also counts as a qr_scan.


@require_GET
def share_page(request, shortcode):
    card = _get_card_or_404(shortcode)
    _track(card, PAGE_VIEW, request)
    if request.GET.get("src") == "qr":
        _track(card, QR_SCAN, request)
    return render(
        request,
        "cards/share_page.html",
        {"card": card, "record": card.to_record()},
    )


@require_POST
def save_contact(request, shortcode):
    """The share page's "Save contact" button: log the click and hand over the .vcf."""
    card = _get_card_or_404(shortcode)
    _track(card, SAVE_CLICK, request)
    response = _vcard_response(card.to_record())
    _track(card, DOWNLOAD, request)
    return response


@require_GET
def vcard_file(request, shortcode):
    """Raw vCard for a short code, for direct links and other clients. Not tracked."""
    try:
        card = get_card(shortcode)
    except Exception as e:
        logger.error(f"Error loading card {shortcode}: {e}")
        return JsonResponse({"error": "Database error"}, status=500)
    if card is None:
        return JsonResponse({"error": "vCard not found"}, status=404)
    return _vcard_response(card.to_record())


@require_GET
def card_qr(request, shortcode):
    """
    PNG QR code for a stored card.

    By default the code points at the share page with ?src=qr so scans are
    counted. With ?format=vcard it carries the vCard itself (no photo) and
    works offline, but scans can't be tracked.
    """
    card = _get_card_or_404(shortcode)
    record = card.to_record()
    if request.GET.get("format") == "vcard":
        png = generate_vcard_qr(record)
    else:
        png = generate_url_qr(f"{_share_url(request, card)}?src=qr")

    response = HttpResponse(png, content_type="image/png")
    disposition = "attachment" if request.GET.get("download") == "1" else "inline"
    response["Content-Disposition"] = f'{disposition}; filename="{qr_filename(record)}"'
    return response


@require_http_methods(["GET", "POST"])
def my_cards(request):
    """Cards created from this browser. POST remove=<shortcode> forgets one."""
    if request.method == "POST":
        shortcode = request.POST.get("remove", "")
        if session.remove_saved_card(request, shortcode):
            messages.success(request, "Card removed from your list.")
        return redirect("cards:my_cards")

    return render(
        request, "cards/my_cards.html", {"cards": session.get_saved_cards(request)}
    )

