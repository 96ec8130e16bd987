"""Core domain: post discovery, validation, locations and the feed model."""
