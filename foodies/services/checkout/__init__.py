"""Checkout workflow."""
