"""Configuration for the definition cache."""
