"""Product domain exceptions.

Raised by the Service Layer when an ownership gate fails or a lookup comes
back empty.  Database errors are never wrapped in these; they propagate as
``django.db.DatabaseError`` so callers can tell the two apart.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog domain outcomes."""

    status_code = 400


class ProductForbidden(CatalogError):
    """The user does not own the shop or product being mutated."""

    status_code = 403


class ProductNotFound(CatalogError):
    """No live product matched the update, or the listing came back empty."""

    status_code = 404
