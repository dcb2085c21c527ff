"""Foodies storefront client."""
