"""Request encoding — TransactionAttributes to minFraud wire parameters."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import Configuration
from .models import TransactionAttributes

logger = logging.getLogger(__name__)

# Transaction attribute -> wire parameter name
ATTRIBUTE_MAP: dict[str, str] = {
    "ip": "i",
    "city": "city",
    "state": "region",
    "postal": "postal",
    "country": "country",
    "transaction_id": "txnID",
    "email_domain": "domain",
    "email_md5": "emailMD5",
}


def encode(attributes: TransactionAttributes, config: Configuration) -> dict[str, str]:
    """Build the flat parameter set sent to the service.

    Only parameters with a value are emitted. The license key always comes
    from the configuration, never from the transaction.
    """
    config.require()

    params: dict[str, Optional[str]] = {
        wire_key: getattr(attributes, attr) for attr, wire_key in ATTRIBUTE_MAP.items()
    }
    params["license_key"] = config.license_key

    tier = attributes.service_tier or config.requested_type
    params["requested_type"] = tier.value if tier is not None else None

    encoded = {key: value for key, value in params.items() if value is not None}
    logger.debug("Encoded minFraud request with parameters %s", sorted(k for k in encoded if k != "license_key"))
    return encoded
