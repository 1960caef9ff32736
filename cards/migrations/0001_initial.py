import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ContactCard",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("shortcode", models.CharField(db_index=True, max_length=32, unique=True)),
                (
                    "session_id",
                    models.CharField(blank=True, db_index=True, default="", max_length=64),
                ),
                ("photo", models.TextField(blank=True, null=True)),
                ("first_name", models.CharField(blank=True, default="", max_length=100)),
                ("last_name", models.CharField(blank=True, default="", max_length=100)),
                ("title", models.CharField(blank=True, default="", max_length=150)),
                ("organization", models.CharField(blank=True, default="", max_length=200)),
                ("phone_mobile", models.CharField(blank=True, default="", max_length=50)),
                ("phone_work", models.CharField(blank=True, default="", max_length=50)),
                ("phone_fax", models.CharField(blank=True, default="", max_length=50)),
                ("email_primary", models.CharField(blank=True, default="", max_length=254)),
                ("email_secondary", models.CharField(blank=True, default="", max_length=254)),
                ("website", models.CharField(blank=True, default="", max_length=500)),
                ("linkedin", models.CharField(blank=True, default="", max_length=500)),
                ("twitter", models.CharField(blank=True, default="", max_length=500)),
                ("address_street", models.CharField(blank=True, default="", max_length=255)),
                ("address_city", models.CharField(blank=True, default="", max_length=100)),
                ("address_state", models.CharField(blank=True, default="", max_length=100)),
                ("address_zip", models.CharField(blank=True, default="", max_length=20)),
                ("address_country", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CardEvent",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("page_view", "Page viewed"),
                            ("save_click", "Save clicked"),
                            ("download", "Downloaded"),
                            ("qr_scan", "QR scanned"),
                        ],
                        max_length=20,
                    ),
                ),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("ip_hash", models.CharField(blank=True, max_length=64, null=True)),
                ("referrer", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "card",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="events",
                        to="cards.contactcard",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["card", "event_type"], name="cards_event_card_type_idx"
                    )
                ],
            },
        ),
    ]
