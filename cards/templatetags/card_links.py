# cards/templatetags/card_links.py
from django import template

register = template.Library()

WEB_SCHEMES = ("http://", "https://")


@register.filter(name="web_url")
def web_url_filter(value):
    """
    Return `value` if it is an http(s) URL, else "".

    Card fields are free text typed by anyone, so only web links may end up
    in an href on the public share page.
    """
    if isinstance(value, str) and value.strip().lower().startswith(WEB_SCHEMES):
        return value.strip()
    return ""
