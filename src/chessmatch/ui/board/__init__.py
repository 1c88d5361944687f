"""Board scene and view."""
