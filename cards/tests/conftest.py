from io import BytesIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from cards.models import ContactCard

TINY_PNG_DATA_URL = "data:image/png;base64,AAAA"


def make_image_upload(name="photo.png", size=(640, 480), fmt="PNG"):
    buffer = BytesIO()
    Image.new("RGB", size, color=(30, 120, 200)).save(buffer, format=fmt)
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=f"image/{fmt.lower()}")


@pytest.fixture
def full_record_data():
    return {
        "first_name": "John",
        "last_name": "Doe",
        "title": "Director of Development",
        "organization": "Acme Inc.",
        "phone_mobile": "+1 555 123 4567",
        "phone_work": "+1 555 987 6543",
        "phone_fax": "+1 555 000 1111",
        "email_primary": "john@example.com",
        "email_secondary": "jd@example.org",
        "website": "https://example.com",
        "linkedin": "https://linkedin.com/in/johndoe",
        "twitter": "https://x.com/johndoe",
        "address_street": "123 Main St",
        "address_city": "NYC",
        "address_state": "NY",
        "address_zip": "10001",
        "address_country": "USA",
    }


@pytest.fixture
def card(db, full_record_data):
    return ContactCard.objects.create(
        shortcode="Ab3_x-9Z", session_id="s" * 24, **full_record_data
    )


@pytest.fixture
def image_upload():
    return make_image_upload()
