import base64
import logging
from io import BytesIO

from django.conf import settings
from PIL import Image

logger = logging.getLogger(__name__)

MIN_ASPECT_RATIO = 0.5  # Tallest allowed is 2:1 (portrait)
MAX_ASPECT_RATIO = 2.0  # Widest allowed is 2:1 (landscape)
JPEG_QUALITY = 80


def create_square_thumbnail(image, size):
    """
    Center-crop an image to a square and resize it to `size x size`.

    Contact-book software shows the PHOTO as a round or square avatar, so a
    square crop keeps the face where the viewer expects it.
    """
    width, height = image.size

    if width > height:
        # Landscape: crop sides
        left = (width - height) // 2
        box = (left, 0, left + height, height)
    else:
        # Portrait or square: crop top/bottom
        top = (height - width) // 2
        box = (0, top, width, top + width)

    cropped = image.crop(box)
    if cropped.size[0] <= size:
        return cropped
    return cropped.resize((size, size), Image.Resampling.LANCZOS)


def photo_to_data_url(uploaded_file, max_size=None):
    """
    Turn an uploaded image into a compact JPEG data URL for the PHOTO line.

    Args:
        uploaded_file: File-like object containing the uploaded image
        max_size: Edge length in pixels of the square output
            (defaults to settings.CARD_PHOTO_MAX_SIZE)

    Returns:
        str of the form "data:image/jpeg;base64,<payload>"

    Raises:
        ValueError: If the image is invalid or has an unacceptable aspect ratio
    """
    if max_size is None:
        max_size = getattr(settings, "CARD_PHOTO_MAX_SIZE", 400)

    try:
        if hasattr(uploaded_file, "seek"):
            uploaded_file.seek(0)
        img = Image.open(uploaded_file)
        img = img.convert("RGB")
    except Exception as e:
        raise ValueError(f"Invalid image file: {e}")

    width, height = img.size
    aspect_ratio = width / height
    if not (MIN_ASPECT_RATIO <= aspect_ratio <= MAX_ASPECT_RATIO):
        raise ValueError(
            "Image must be reasonably square, no panoramas or skyscrapers."
        )

    thumb = create_square_thumbnail(img, max_size)
    buffer = BytesIO()
    thumb.save(buffer, format="JPEG", quality=JPEG_QUALITY, optimize=True)
    payload = base64.b64encode(buffer.getvalue()).decode("ascii")

    logger.info(
        f"Converted contact photo {width}x{height} to {thumb.size[0]}x{thumb.size[1]} "
        f"JPEG ({len(payload)} base64 chars)"
    )
    return f"data:image/jpeg;base64,{payload}"
