"""Cart and order models."""
