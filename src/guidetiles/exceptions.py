"""Custom exceptions for guidetiles."""


class GuidetilesError(Exception):
    """Base exception for guidetiles operations."""


class ConfigurationError(GuidetilesError):
    """Required configuration is missing or invalid."""


class StoreError(GuidetilesError):
    """Error while reading from or writing to the guides table."""


class GuideNotFoundError(StoreError):
    """No guide row matched the requested identifier."""
