"""Storefront services."""
