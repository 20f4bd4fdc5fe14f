"""Storefront backend client package."""

from storefront.client.http import StorefrontClient

__all__ = ["StorefrontClient"]
