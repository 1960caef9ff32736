from django import forms
from django.core.exceptions import ValidationError

from .models import RECORD_FIELDS
from .utils.image_processing import photo_to_data_url
from .utils.vcard_tools import ContactRecord, parse_photo_data_url

#########################
# ContactCardForm Class

# The card builder form. One field per ContactRecord field, grouped into
# the four builder steps (STEPS) for display.
# A newly uploaded photo is converted to a JPEG data URL in clean() and
# carried between posts in the hidden `photo` field.

# Nothing here validates phone numbers, e-mail addresses or URLs; contact-book
# software accepts free text in all of these.

STEPS = [
    ("Basic Info", ["first_name", "last_name", "title", "organization"]),
    ("Contact", ["phone_mobile", "phone_work", "phone_fax", "email_primary", "email_secondary"]),
    ("Social", ["website", "linkedin", "twitter"]),
    ("Address", ["address_street", "address_city", "address_state", "address_zip", "address_country"]),
]

ACTION_PREVIEW = "preview"
ACTION_DOWNLOAD = "download"
ACTION_SHARE = "share"
ACTIONS = (ACTION_PREVIEW, ACTION_DOWNLOAD, ACTION_SHARE)


def _text(label, max_length, placeholder=""):
    return forms.CharField(
        label=label,
        max_length=max_length,
        required=False,
        # Values go into the vCard exactly as typed
        strip=False,
        widget=forms.TextInput(attrs={"placeholder": placeholder}),
    )


class ContactCardForm(forms.Form):
    photo = forms.CharField(required=False, widget=forms.HiddenInput)
    photo_upload = forms.FileField(label="Photo", required=False)
    remove_photo = forms.BooleanField(label="Remove photo", required=False)
    # Short code of the stored card this form was loaded from, if any
    source_shortcode = forms.CharField(required=False, widget=forms.HiddenInput)

    first_name = _text("First name", 100, "John")
    last_name = _text("Last name", 100, "Doe")
    title = _text("Job title", 150, "Director of Development")
    organization = _text("Organization", 200, "Acme Inc.")
    phone_mobile = _text("Mobile phone", 50, "+1 (555) 123-4567")
    phone_work = _text("Work phone", 50, "+1 (555) 987-6543")
    phone_fax = _text("Fax", 50)
    email_primary = _text("Email", 254, "john@example.com")
    email_secondary = _text("Secondary email", 254)
    website = _text("Website", 500, "https://example.com")
    linkedin = _text("LinkedIn", 500, "https://linkedin.com/in/johndoe")
    twitter = _text("Twitter / X", 500, "https://x.com/johndoe")
    address_street = _text("Street", 255)
    address_city = _text("City", 100)
    address_state = _text("State", 100)
    address_zip = _text("ZIP / Postal code", 20)
    address_country = _text("Country", 100)

    def __init__(self, *args, action=ACTION_PREVIEW, **kwargs):
        super().__init__(*args, **kwargs)
        self.action = action if action in ACTIONS else ACTION_PREVIEW

    def steps(self):
        """Yield (label, [bound fields]) per builder step for the template."""
        for label, names in STEPS:
            yield label, [self[name] for name in names]

    def clean_photo(self):
        photo = self.cleaned_data.get("photo") or ""
        # Anything that isn't an image data URL would be dropped by the
        # serializer anyway; don't keep it around in the hidden field.
        if photo and not parse_photo_data_url(photo):
            return ""
        return photo

    def clean(self):
        cleaned = super().clean()

        if cleaned.get("remove_photo"):
            cleaned["photo"] = ""
        upload = cleaned.get("photo_upload")
        if upload:
            try:
                cleaned["photo"] = photo_to_data_url(upload)
            except ValueError as e:
                # Re-raise as validation error so it shows in form
                self.add_error("photo_upload", ValidationError(str(e)))

        if self.action in (ACTION_DOWNLOAD, ACTION_SHARE):
            if not (cleaned.get("first_name") or cleaned.get("last_name")):
                raise ValidationError("Enter at least a first or last name.")

        return cleaned

    def to_record(self) -> ContactRecord:
        return ContactRecord.from_mapping(self.cleaned_data)

    @classmethod
    def initial_from_card(cls, card):
        initial = {name: getattr(card, name) for name in RECORD_FIELDS}
        initial["source_shortcode"] = card.shortcode
        return initial
