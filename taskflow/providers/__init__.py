"""Providers: generation services and key-value storage."""
