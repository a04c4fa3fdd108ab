"""Client configuration: credential, default service tier and endpoints.

A process-wide default is installed with ``configure()`` and read with
``get_configuration()``. Every entry point also accepts an explicit
``Configuration`` so callers with several credentials never share state.
"""

from __future__ import annotations

import logging
import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict

from .core.models import Region, ServiceTier
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://minfraud.maxmind.com/app/ccv2r"

SERVICE_HOSTS: dict[str, str] = {
    Region.US_EAST.value: "https://minfraud-us-east.maxmind.com/app/ccv2r",
    Region.US_WEST.value: "https://minfraud-us-west.maxmind.com/app/ccv2r",
    Region.EU_WEST.value: "https://minfraud-eu-west.maxmind.com/app/ccv2r",
}


class Configuration(BaseModel):
    """Credential and defaults shared by every transaction that uses it."""

    model_config = ConfigDict(frozen=True)

    license_key: Optional[str] = None
    requested_type: Optional[ServiceTier] = None
    verify_tls: bool = True

    def has_required_configuration(self) -> bool:
        return bool(self.license_key)

    def require(self) -> None:
        if not self.has_required_configuration():
            raise ConfigurationError("You must set license_key so MaxMind can identify you")

    @classmethod
    def from_env(cls) -> Configuration:
        """Build a configuration from MINFRAUD_* environment variables."""
        requested_type = os.environ.get("MINFRAUD_REQUESTED_TYPE") or None
        if requested_type is not None and requested_type not in {t.value for t in ServiceTier}:
            raise ConfigurationError(
                f"MINFRAUD_REQUESTED_TYPE must be 'standard' or 'premium', got {requested_type!r}"
            )
        verify = os.environ.get("MINFRAUD_VERIFY_TLS", "true").strip().lower()
        return cls(
            license_key=os.environ.get("MINFRAUD_LICENSE_KEY") or None,
            requested_type=requested_type,
            verify_tls=verify not in ("0", "false", "no"),
        )


def resolve_endpoint(choice: Optional[str] = None) -> str:
    """Turn a region key or literal URL into the endpoint to call.

    Unknown keys are taken as a URL override and must be absolute http(s) URLs.
    """
    if not choice:
        return DEFAULT_HOST
    if isinstance(choice, Region):
        choice = choice.value
    if choice in SERVICE_HOSTS:
        return SERVICE_HOSTS[choice]
    parsed = urlparse(choice)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"Unknown service region or invalid endpoint URL: {choice!r}")
    if parsed.scheme == "http":
        logger.warning("Using unencrypted endpoint override %s", choice)
    return choice


_configuration: Optional[Configuration] = None


def configure(
    license_key: Optional[str] = None,
    requested_type: Optional[str] = None,
    verify_tls: bool = True,
) -> Configuration:
    """Install the process-wide configuration.

    Raises ConfigurationError when no license key is given.
    """
    global _configuration
    if requested_type is not None and requested_type not in {t.value for t in ServiceTier}:
        raise ConfigurationError(f"requested_type must be 'standard' or 'premium', got {requested_type!r}")
    config = Configuration(license_key=license_key, requested_type=requested_type, verify_tls=verify_tls)
    config.require()
    _configuration = config
    return config


def get_configuration() -> Configuration:
    """Return the process-wide configuration, loading it from the environment on first use."""
    global _configuration
    if _configuration is None:
        _configuration = Configuration.from_env()
    return _configuration


def reset_configuration() -> None:
    global _configuration
    _configuration = None


def has_required_configuration() -> bool:
    return get_configuration().has_required_configuration()
