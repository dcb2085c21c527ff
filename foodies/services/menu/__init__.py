"""Food catalog models and helpers."""
