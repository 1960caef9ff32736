import base64
import re
from dataclasses import dataclass, fields
from io import BytesIO
from typing import Any, Mapping, Optional

import qrcode

VCARD_CONTENT_TYPE = "text/vcard; charset=utf-8"
CRLF = "\r\n"

# data:image/<subtype>;base64,<payload>, payload on a single line
PHOTO_DATA_URL_RE = re.compile(r"data:image/(\w+);base64,(.+)", re.ASCII)


@dataclass(frozen=True)
class ContactRecord:
    """A business contact as entered in the builder or loaded from a card.

    Every field is optional. Text fields default to the empty string and the
    photo, when present, is a ``data:image/...;base64,...`` URL.
    """

    photo: Optional[str] = None
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    organization: str = ""
    phone_mobile: str = ""
    phone_work: str = ""
    phone_fax: str = ""
    email_primary: str = ""
    email_secondary: str = ""
    website: str = ""
    linkedin: str = ""
    twitter: str = ""
    address_street: str = ""
    address_city: str = ""
    address_state: str = ""
    address_zip: str = ""
    address_country: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContactRecord":
        """Build a record from form data, JSON or a model's values.

        Unknown keys are ignored. Missing or None text values become "".
        """
        values = {}
        for f in fields(cls):
            value = data.get(f.name)
            if f.name == "photo":
                values[f.name] = value or None
            else:
                values[f.name] = "" if value is None else value
        return cls(**values)

    @property
    def is_nameable(self) -> bool:
        return bool(self.first_name or self.last_name)

    @property
    def has_address(self) -> bool:
        return any(
            (
                self.address_street,
                self.address_city,
                self.address_state,
                self.address_zip,
                self.address_country,
            )
        )


@dataclass(frozen=True)
class VCardOptions:
    """Serialization switches.

    include_photo: emit the PHOTO line when the record carries a valid image
        data URL. QR payloads must turn this off; an embedded photo makes the
        code too dense to scan reliably.
    escape_values: apply vCard 3.0 TEXT escaping to free-text values. Off by
        default so output matches what existing cards have always produced.
    """

    include_photo: bool = True
    escape_values: bool = False


DEFAULT_OPTIONS = VCardOptions()
QR_OPTIONS = VCardOptions(include_photo=False)


def escape_text(value: str) -> str:
    """vCard 3.0 escaping for TEXT values: backslash, semicolon, comma, newline."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", r"\;")
        .replace(",", r"\,")
        .replace("\r\n", r"\n")
        .replace("\r", r"\n")
        .replace("\n", r"\n")
    )


def parse_photo_data_url(photo):
    """Return (subtype, payload) for an image data URL, or None if it does not match."""
    if not isinstance(photo, str):
        return None
    match = PHOTO_DATA_URL_RE.fullmatch(photo)
    if not match:
        return None
    return match.group(1), match.group(2)


def serialize(record: ContactRecord, options: Optional[VCardOptions] = None) -> str:
    """Render a contact as vCard 3.0 text.

    Lines are CRLF separated and the text ends with ``END:VCARD\\r\\n``. Empty
    fields are left out entirely; a record with nothing filled in still
    yields the BEGIN/VERSION/END skeleton. This function never raises for a
    well-shaped record and keeps no state between calls.
    """
    if options is None:
        options = DEFAULT_OPTIONS

    esc = escape_text if options.escape_values else (lambda value: value)

    lines = ["BEGIN:VCARD", "VERSION:3.0"]

    if record.is_nameable:
        full_name = f"{record.first_name} {record.last_name}".strip()
        lines.append(f"N:{esc(record.last_name)};{esc(record.first_name)};;;")
        lines.append(f"FN:{esc(full_name)}")

    if record.organization:
        lines.append(f"ORG:{esc(record.organization)}")
    if record.title:
        lines.append(f"TITLE:{esc(record.title)}")
    if record.phone_mobile:
        lines.append(f"TEL;TYPE=CELL:{esc(record.phone_mobile)}")
    if record.phone_work:
        lines.append(f"TEL;TYPE=WORK:{esc(record.phone_work)}")
    if record.phone_fax:
        lines.append(f"TEL;TYPE=FAX:{esc(record.phone_fax)}")
    if record.email_primary:
        lines.append(f"EMAIL;TYPE=INTERNET,PREF:{esc(record.email_primary)}")
    if record.email_secondary:
        lines.append(f"EMAIL;TYPE=INTERNET:{esc(record.email_secondary)}")
    # URL-like values are never escaped, commas are legal in URLs
    if record.website:
        lines.append(f"URL:{record.website}")
    if record.linkedin:
        lines.append(f"X-SOCIALPROFILE;TYPE=linkedin:{record.linkedin}")
    if record.twitter:
        lines.append(f"X-SOCIALPROFILE;TYPE=twitter:{record.twitter}")

    if record.has_address:
        adr = ";".join(
            esc(part)
            for part in (
                record.address_street,
                record.address_city,
                record.address_state,
                record.address_zip,
                record.address_country,
            )
        )
        lines.append(f"ADR;TYPE=WORK:;;{adr}")

    if options.include_photo:
        photo = parse_photo_data_url(record.photo)
        if photo:
            subtype, payload = photo
            lines.append(f"PHOTO;ENCODING=b;TYPE={subtype.upper()}:{payload}")

    lines.append("END:VCARD")
    lines.append("")
    return CRLF.join(lines)


def vcard_filename(record: ContactRecord) -> str:
    return f"{record.first_name or 'contact'}_{record.last_name or 'card'}.vcf"


def qr_filename(record: ContactRecord) -> str:
    return f"{record.first_name or 'contact'}_{record.last_name or 'card'}_QR.png"


def qr_payload(record: ContactRecord, as_data_uri=False) -> str:
    """The text a QR code should carry for this contact. The photo is always left out."""
    vcard = serialize(record, QR_OPTIONS)
    if not as_data_uri:
        return vcard
    encoded = base64.b64encode(vcard.encode("utf-8")).decode("ascii")
    return f"data:text/vcard;base64,{encoded}"


def _qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, "PNG")
    return buffer.getvalue()


def generate_vcard_qr(record: ContactRecord, as_data_uri=False) -> bytes:
    """Generate a PNG QR code carrying the contact's vCard (without photo)."""
    return _qr_png(qr_payload(record, as_data_uri=as_data_uri))


def generate_url_qr(url: str) -> bytes:
    """Generate a PNG QR code pointing at a share page."""
    return _qr_png(url)
