from django.urls import path

from . import views

app_name = "analytics"

urlpatterns = [
    path("<str:shortcode>/", views.card_dashboard, name="card_dashboard"),
]
