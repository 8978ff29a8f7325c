"""Catalogue domain API package."""

from catalogue.api.routes import discount_router

__all__ = ["discount_router"]
