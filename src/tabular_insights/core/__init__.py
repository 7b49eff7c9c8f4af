"""Core enumerations and scalar helpers shared across the package."""
