import pytest

from cards.forms import ACTION_DOWNLOAD, ACTION_PREVIEW, ACTION_SHARE, ContactCardForm
from cards.utils.vcard_tools import ContactRecord

from .conftest import TINY_PNG_DATA_URL


def test_empty_form_is_valid_for_preview():
    form = ContactCardForm({}, action=ACTION_PREVIEW)
    assert form.is_valid()
    assert form.to_record() == ContactRecord()


@pytest.mark.parametrize("action", [ACTION_DOWNLOAD, ACTION_SHARE])
def test_download_and_share_need_a_name(action):
    form = ContactCardForm({"organization": "Acme"}, action=action)
    assert not form.is_valid()
    assert "Enter at least a first or last name." in form.non_field_errors()


def test_last_name_alone_is_enough():
    form = ContactCardForm({"last_name": "Doe"}, action=ACTION_DOWNLOAD)
    assert form.is_valid()


def test_unknown_action_falls_back_to_preview():
    form = ContactCardForm({}, action="explode")
    assert form.action == ACTION_PREVIEW


def test_phone_and_email_are_not_validated():
    form = ContactCardForm(
        {"first_name": "J", "phone_mobile": "call me", "email_primary": "not-an-email"},
        action=ACTION_DOWNLOAD,
    )
    assert form.is_valid()
    record = form.to_record()
    assert record.phone_mobile == "call me"
    assert record.email_primary == "not-an-email"


def test_hidden_photo_is_kept():
    form = ContactCardForm({"photo": TINY_PNG_DATA_URL})
    assert form.is_valid()
    assert form.to_record().photo == TINY_PNG_DATA_URL


def test_hidden_photo_that_is_not_an_image_is_dropped():
    form = ContactCardForm({"photo": "javascript:alert(1)"})
    assert form.is_valid()
    assert form.to_record().photo is None


def test_remove_photo():
    form = ContactCardForm({"photo": TINY_PNG_DATA_URL, "remove_photo": "on"})
    assert form.is_valid()
    assert form.to_record().photo is None


def test_upload_replaces_photo(image_upload):
    form = ContactCardForm(
        {"photo": TINY_PNG_DATA_URL}, {"photo_upload": image_upload}
    )
    assert form.is_valid()
    assert form.to_record().photo.startswith("data:image/jpeg;base64,")


def test_bad_upload_is_a_field_error():
    from django.core.files.uploadedfile import SimpleUploadedFile

    upload = SimpleUploadedFile("x.png", b"nope", content_type="image/png")
    form = ContactCardForm({}, {"photo_upload": upload})
    assert not form.is_valid()
    assert "photo_upload" in form.errors


def test_steps_group_all_contact_fields():
    form = ContactCardForm()
    names = [field.name for _, fields in form.steps() for field in fields]
    assert len(names) == 17
    assert names[0] == "first_name"
    assert names[-1] == "address_country"


@pytest.mark.django_db
def test_initial_from_card(card):
    initial = ContactCardForm.initial_from_card(card)
    assert initial["first_name"] == "John"
    assert initial["source_shortcode"] == card.shortcode
