"""URL checks for docscope."""

from .url_validator import UrlValidationResult, UrlValidator

__all__ = ["UrlValidationResult", "UrlValidator"]
