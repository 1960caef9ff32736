###################################################################################
# URL configuration for Card Studio project.
#
# The `urlpatterns` list routes URLs to views. For more information please see:
#    https://docs.djangoproject.com/en/5.1/topics/http/urls/
#
# The cards app owns the site root (builder) and the public /c/<shortcode>/
# share links; analytics lives under /analytics/<shortcode>/.
###################################################################################


from django.contrib import admin
from django.urls import include, path

from utils.health import health_check

urlpatterns = [
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health_check"),
    path("analytics/", include("analytics.urls")),
    path("", include("cards.urls")),
]
