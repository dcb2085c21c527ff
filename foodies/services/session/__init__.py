"""Client-side session state."""
