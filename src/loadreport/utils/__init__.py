"""Configuration, validation and duration helpers."""
