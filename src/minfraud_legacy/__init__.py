"""minFraud legacy client.

Validate transaction attributes, send them to the minFraud legacy scoring
service and decode its ``key=value;...`` answer into typed attributes.
"""

__version__ = "0.1.0"

from .config import (
    Configuration,
    configure,
    get_configuration,
    has_required_configuration,
    reset_configuration,
    resolve_endpoint,
)
from .core.models import DecodedResponse, Region, ServiceTier, TransactionAttributes
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    DecodeError,
    InvalidAttributeType,
    InvalidServiceRegion,
    InvalidServiceTier,
    InvalidTimeout,
    MinFraudError,
    MissingRequiredAttribute,
    ServiceError,
    UnknownAttribute,
    ValidationError,
)
from .transaction import Transaction, TransactionState
