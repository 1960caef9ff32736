"""
Security utility functions for the Card Studio application.

This module provides helpers for handling visitor data that should not be
stored in the clear, such as client IP addresses recorded with card events.
"""

import hashlib

from django.conf import settings


def get_client_ip(request) -> str | None:
    """
    Return the client's IP address for a request.

    Uses the first entry of X-Forwarded-For when the site runs behind a proxy
    or load balancer, otherwise REMOTE_ADDR.
    """
    if request is None:
        return None
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR") or None


def hash_client_ip(request) -> str | None:
    """
    Return a salted SHA-256 hex digest of the client's IP address.

    The SECRET_KEY is the salt, so digests can be compared within one
    deployment (e.g. to count unique visitors) but not reversed by lookup
    tables built elsewhere.

    Returns:
        64-character hex string, or None if the IP is unknown
    """
    ip = get_client_ip(request)
    if not ip:
        return None
    salted = f"{settings.SECRET_KEY}:{ip}".encode()
    return hashlib.sha256(salted).hexdigest()
