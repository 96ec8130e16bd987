"""Template loading and template data."""
