from django.urls import path

from . import views

app_name = "cards"

urlpatterns = [
    path("", views.builder, name="builder"),
    path("cards/mine/", views.my_cards, name="my_cards"),
    path("cards/<str:shortcode>/share/", views.share_link, name="share_link"),
    # Public, shareable URLs
    path("c/<str:shortcode>/", views.share_page, name="share_page"),
    path("c/<str:shortcode>/save/", views.save_contact, name="save_contact"),
    path("c/<str:shortcode>/vcard.vcf", views.vcard_file, name="vcard_file"),
    path("c/<str:shortcode>/qr.png", views.card_qr, name="card_qr"),
]
