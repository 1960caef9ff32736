from django.core.management.base import BaseCommand, CommandError

from cards.utils.card_store import get_record
from cards.utils.vcard_tools import (
    QR_OPTIONS,
    generate_vcard_qr,
    serialize,
    vcard_filename,
)


class Command(BaseCommand):
    help = "Write a stored card to a .vcf file, optionally with a QR code PNG."

    def add_arguments(self, parser):
        parser.add_argument("shortcode", help="Short code of the stored card")
        parser.add_argument(
            "--output",
            help="Path of the .vcf file (default: <first>_<last>.vcf)",
        )
        parser.add_argument(
            "--no-photo",
            action="store_true",
            help="Leave the embedded photo out of the .vcf",
        )
        parser.add_argument(
            "--qr",
            metavar="PATH",
            help="Also write a QR code PNG carrying the vCard (never includes the photo)",
        )

    def handle(self, *args, **options):
        shortcode = options["shortcode"]
        record = get_record(shortcode)
        if record is None:
            raise CommandError(f"No card with short code '{shortcode}'")

        vcard = serialize(record, QR_OPTIONS if options["no_photo"] else None)
        vcf_path = options.get("output") or vcard_filename(record)
        # newline="" keeps the CRLF line endings intact on every platform
        with open(vcf_path, "w", encoding="utf-8", newline="") as f:
            f.write(vcard)
        self.stdout.write(self.style.SUCCESS(f"Wrote {vcf_path}"))

        qr_path = options.get("qr")
        if qr_path:
            with open(qr_path, "wb") as f:
                f.write(generate_vcard_qr(record))
            self.stdout.write(self.style.SUCCESS(f"Wrote {qr_path}"))
