from django.apps import AppConfig

#########################
# CardsConfig Class

# Application configuration for the "cards" app: the card builder, stored
# cards with their share links, and visitor events.


class CardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cards"
    verbose_name = "Contact cards"
