"""Transaction attribute validation.

Checks raw caller input and builds the immutable TransactionAttributes.
Nothing is constructed unless every rule passes.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from ..config import resolve_endpoint
from ..exceptions import (
    ConfigurationError,
    InvalidAttributeType,
    InvalidServiceRegion,
    InvalidServiceTier,
    InvalidTimeout,
    MissingRequiredAttribute,
    UnknownAttribute,
)
from .models import ServiceTier, TransactionAttributes

REQUIRED_ATTRIBUTES = ("ip", "transaction_id")

STRING_ATTRIBUTES = (
    "ip",
    "city",
    "state",
    "postal",
    "country",
    "email",
    "transaction_id",
    "service_region",
)

KNOWN_ATTRIBUTES = frozenset(STRING_ATTRIBUTES) | {"service_tier", "timeout"}


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def validate(raw: Mapping[str, Any]) -> TransactionAttributes:
    """Validate raw transaction attributes.

    Raises:
        UnknownAttribute: a key that is not a transaction attribute.
        MissingRequiredAttribute: ip or transaction_id absent or empty.
        InvalidAttributeType: a populated string attribute that is not a str.
        InvalidTimeout: timeout that is not a positive, finite int or float.
        InvalidServiceRegion: service_region that is neither a region key nor an http(s) URL.
        InvalidServiceTier: service_tier other than standard/premium.
    """
    for key in raw:
        if key not in KNOWN_ATTRIBUTES:
            raise UnknownAttribute(key)

    for field in REQUIRED_ATTRIBUTES:
        if _is_blank(raw.get(field)):
            raise MissingRequiredAttribute(field)

    for field in STRING_ATTRIBUTES:
        value = raw.get(field)
        if value is not None and not isinstance(value, str):
            raise InvalidAttributeType(field)

    timeout = raw.get("timeout")
    # bool is an int subclass but never a meaningful timeout
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        raise InvalidTimeout()
    if timeout is not None and not (math.isfinite(timeout) and timeout > 0):
        raise InvalidTimeout("must be a positive number of seconds")

    region = raw.get("service_region")
    if region:
        try:
            resolve_endpoint(region)
        except ConfigurationError:
            raise InvalidServiceRegion(region) from None

    tier = raw.get("service_tier")
    if tier is not None:
        try:
            tier = ServiceTier(tier)
        except ValueError:
            raise InvalidServiceTier(tier) from None

    values = {k: v for k, v in raw.items() if v is not None}
    if tier is not None:
        values["service_tier"] = tier
    return TransactionAttributes(**values)
