"""Pydantic data models — the typed values that flow through a transaction.

Validated input attributes on the way out, decoded response attributes on
the way back.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ServiceTier(str, Enum):
    """Requested depth of fraud analysis."""

    STANDARD = "standard"
    PREMIUM = "premium"


class Region(str, Enum):
    """Named service regions with a dedicated endpoint."""

    US_EAST = "us_east"
    US_WEST = "us_west"
    EU_WEST = "eu_west"


AttributeValue = Union[bool, int, float, str, None]


class TransactionAttributes(BaseModel):
    """Validated transaction attributes. Built by the validator, never mutated."""

    model_config = ConfigDict(frozen=True)

    ip: str
    transaction_id: str
    city: Optional[str] = None
    state: Optional[str] = None
    postal: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    service_tier: Optional[ServiceTier] = None
    timeout: Optional[float] = Field(None, description="Seconds, bounds both connect and read")
    service_region: Optional[str] = Field(None, description="Region key or literal endpoint URL")

    @property
    def email_domain(self) -> Optional[str]:
        """Everything after the last '@' of the email, '' when there is none."""
        if self.email is None:
            return None
        _, at, domain = self.email.rpartition("@")
        return domain if at else ""

    @property
    def email_md5(self) -> Optional[str]:
        if self.email is None:
            return None
        return hashlib.md5(self.email.encode("utf-8")).hexdigest()


class RawResponse(BaseModel):
    """What the transport hands back before any parsing."""

    status_code: int
    body: bytes = b""
    encoding: str = "ISO-8859-1"

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class DecodedResponse(BaseModel):
    """Typed attributes decoded from a minFraud response body.

    Keys are normalized (``ip_corporateProxy`` becomes ``ip_corporate_proxy``).
    ``get`` returns None both for unknown names and for fields that decoded to
    null (``NA``, ``NotFound``); use ``in`` to tell the two apart.
    """

    status_code: int
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)

    def get(self, name: str, default: AttributeValue = None) -> AttributeValue:
        return self.attributes.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def __getitem__(self, name: str) -> AttributeValue:
        return self.attributes[name]

    @property
    def risk_score(self) -> Optional[float]:
        return self.attributes.get("risk_score")

    @property
    def warning(self) -> Optional[str]:
        """The warning code reported under ``err``, if any."""
        from .decoding import WARNING_CODES

        err = self.attributes.get("err")
        return err if err in WARNING_CODES else None
