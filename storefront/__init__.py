"""Shopper-facing storefront for the wellness store."""

__version__ = "1.0.0"
