"""URL validation performed before any network call."""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass
from urllib.parse import urlparse

from ..errors import InvalidURL


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> UrlValidationResult:
        """Create a valid result."""
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        """Create an invalid result with reason."""
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlValidator:
    """
    Checks that a documentation URL is absolute and well formed.

    Optionally also blocks hosts that point inside the local network:
    - Private/internal IP addresses
    - Localhost and internal domain suffixes

    Example:
        validator = UrlValidator()
        result = validator.validate("https://example.com/page")
        if not result.is_valid:
            print(f"Rejected: {result.rejection_reason}")
    """

    DEFAULT_ALLOWED_SCHEMES = {"http", "https"}
    INTERNAL_SUFFIXES = {".internal", ".local", ".localhost", ".localdomain"}
    LOCALHOST_NAMES = {"localhost", "localhost.localdomain"}

    def __init__(
        self,
        allowed_schemes: set[str] | None = None,
        block_private_hosts: bool = False,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the URL validator.

        Args:
            allowed_schemes: Set of allowed URL schemes (default: {"http", "https"})
            block_private_hosts: Whether to block localhost and private IPs
            logger: Optional logger for validation messages
        """
        self.allowed_schemes = allowed_schemes or self.DEFAULT_ALLOWED_SCHEMES
        self.block_private_hosts = block_private_hosts
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, url: str) -> UrlValidationResult:
        """
        Validate a URL.

        Args:
            url: The URL to validate

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not url or url != url.strip():
            return UrlValidationResult.invalid("URL is empty or has surrounding whitespace")

        try:
            parsed = urlparse(url)
            # Accessing .port validates the port component
            _ = parsed.port
        except ValueError as e:
            return UrlValidationResult.invalid(f"Invalid URL format: {e}")

        if not parsed.scheme:
            return UrlValidationResult.invalid("URL is not absolute (missing scheme)")

        if parsed.scheme not in self.allowed_schemes:
            return UrlValidationResult.invalid(
                f"Scheme '{parsed.scheme}' not allowed (allowed: {sorted(self.allowed_schemes)})"
            )

        hostname = (parsed.hostname or "").lower()
        if not hostname:
            return UrlValidationResult.invalid("URL has no domain")

        if any(ch.isspace() for ch in url):
            return UrlValidationResult.invalid("URL contains whitespace")

        if self.block_private_hosts:
            if hostname in self.LOCALHOST_NAMES:
                return UrlValidationResult.invalid("Localhost URLs not allowed")

            for suffix in self.INTERNAL_SUFFIXES:
                if hostname.endswith(suffix):
                    return UrlValidationResult.invalid(f"Internal domain suffix '{suffix}' not allowed")

            ip_result = self._check_ip_address(hostname)
            if ip_result is not None:
                return ip_result

        return UrlValidationResult.valid()

    def _check_ip_address(self, hostname: str) -> UrlValidationResult | None:
        """
        Check if hostname is a private/internal IP address.

        Args:
            hostname: The hostname to check

        Returns:
            UrlValidationResult if IP is blocked, None if hostname is not an IP
        """
        try:
            ip = ipaddress.ip_address(hostname)
        except ValueError:
            # Not an IP address (it's a domain name)
            return None

        if ip.is_private:
            return UrlValidationResult.invalid(f"Private IP address '{hostname}' not allowed")
        if ip.is_loopback:
            return UrlValidationResult.invalid(f"Loopback IP address '{hostname}' not allowed")
        if ip.is_link_local:
            return UrlValidationResult.invalid(f"Link-local IP address '{hostname}' not allowed")
        if ip.is_reserved:
            return UrlValidationResult.invalid(f"Reserved IP address '{hostname}' not allowed")

        return None

    def require_valid(self, url: str) -> None:
        """
        Raise InvalidURL unless the URL passes validation.

        Args:
            url: The URL to check

        Raises:
            InvalidURL: With the rejection reason
        """
        result = self.validate(url)
        if not result.is_valid:
            self.logger.debug(f"Rejected URL {url!r}: {result.rejection_reason}")
            raise InvalidURL(url, result.rejection_reason or "invalid URL")

    def is_valid(self, url: str) -> bool:
        """Quick check if URL is valid."""
        return self.validate(url).is_valid
