"""Core building blocks: strict models, errors and settings."""
