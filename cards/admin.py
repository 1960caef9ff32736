from django.contrib import admin
from django.http import HttpResponse
from django.utils.html import format_html
from import_export.admin import ImportExportModelAdmin
from reversion.admin import VersionAdmin

from .models import CardEvent, ContactCard
from .utils.vcard_tools import VCARD_CONTENT_TYPE, serialize


#########################
# CardEventInline Class

# Read-only list of the latest visitor events shown on a card's admin page.
# Events are append-only, so nothing here can be added or edited.


class CardEventInline(admin.TabularInline):
    model = CardEvent
    extra = 0
    can_delete = False
    fields = ("event_type", "created_at", "user_agent", "referrer")
    readonly_fields = fields
    ordering = ("-created_at",)

    def has_add_permission(self, request, obj=None):
        return False


#########################
# ContactCardAdmin Class

# Admin for stored contact cards.
# Cards can be imported/exported (django-import-export) and every edit is
# versioned (django-reversion). The "Download as vCard" action bundles the
# selected cards into a single .vcf file.


@admin.register(ContactCard)
class ContactCardAdmin(ImportExportModelAdmin, VersionAdmin):
    list_display = (
        "shortcode",
        "first_name",
        "last_name",
        "organization",
        "created_at",
        "share_link",
    )
    search_fields = (
        "shortcode",
        "first_name",
        "last_name",
        "organization",
        "email_primary",
    )
    readonly_fields = ("shortcode", "created_at", "updated_at")
    ordering = ("-created_at",)
    inlines = [CardEventInline]
    actions = ["download_vcards"]

    @admin.display(description="Share page")
    def share_link(self, obj):
        return format_html('<a href="{}" target="_blank">/c/{}/</a>', obj.get_absolute_url(), obj.shortcode)

    @admin.action(description="Download selected cards as vCard")
    def download_vcards(self, request, queryset):
        # vCard files may hold several cards back to back
        body = "".join(serialize(card.to_record()) for card in queryset)
        response = HttpResponse(body, content_type=VCARD_CONTENT_TYPE)
        response["Content-Disposition"] = 'attachment; filename="contacts.vcf"'
        return response


@admin.register(CardEvent)
class CardEventAdmin(admin.ModelAdmin):
    list_display = ("card", "event_type", "created_at")
    list_filter = ("event_type",)
    search_fields = ("card__shortcode", "card__first_name", "card__last_name")
    readonly_fields = (
        "card",
        "event_type",
        "user_agent",
        "ip_hash",
        "referrer",
        "created_at",
    )
    ordering = ("-created_at",)

    def has_add_permission(self, request):
        return False
