"""Catalog API: users, products and token authentication."""

__version__ = "0.1.0"
