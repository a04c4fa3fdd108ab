"""Response decoding — minFraud's ``key=value;key=value`` body to typed attributes.

The service answers with a flat, unescaped list of records. Values may
themselves contain ``=`` (free-text fields such as ``ip_asnum``), so every
record is split on its first ``=`` only. Keys come back in mixed styles
(``countryMatch``, ``ip_corporateProxy``, ``maxmindID``, ``ERR``) and are
normalized to snake_case before type coercion.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Union

from ..exceptions import ConnectionError, DecodeError, ServiceError
from .models import AttributeValue, DecodedResponse

logger = logging.getLogger(__name__)

SOURCE_ENCODING = "ISO-8859-1"

ERROR_CODES = frozenset({
    "INVALID_LICENSE_KEY",
    "IP_REQUIRED",
    "LICENSE_REQUIRED",
    "COUNTRY_REQUIRED",
    "MAX_REQUESTS_REACHED",
})

WARNING_CODES = frozenset({
    "IP_NOT_FOUND",
    "COUNTRY_NOT_FOUND",
    "CITY_NOT_FOUND",
    "CITY_REQUIRED",
    "POSTAL_CODE_REQUIRED",
    "POSTAL_CODE_NOT_FOUND",
})

INTEGER_ATTRIBUTES = frozenset({
    "distance",
    "queries_remaining",
    "ip_accuracy_radius",
    "ip_metro_code",
    "ip_area_code",
})

FLOAT_ATTRIBUTES = frozenset({
    "ip_latitude",
    "ip_longitude",
    "score",
    "risk_score",
    "proxy_score",
    "ip_country_conf",
    "ip_region_conf",
    "ip_city_conf",
    "ip_postal_conf",
})

BOOLEAN_ATTRIBUTES = frozenset({
    "country_match",
    "high_risk_country",
    "anonymous_proxy",
    "ip_corporate_proxy",
    "free_mail",
    "carder_email",
    "prepaid",
    "city_postal_match",
    "ship_city_postal_match",
    "bin_match",
    "bin_name_match",
    "bin_phone_match",
    "cust_phone_in_billing_loc",
    "ship_forward",
})

BOOLEAN_RESPONSES: dict[str, Optional[bool]] = {
    "Yes": True,
    "No": False,
    "NA": None,
    "NotFound": None,
    "": None,
}

_ALL_UPPER = re.compile(r"\A[A-Z]+\Z")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_INTEGER_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

RawBody = Union[bytes, str]


def normalize_key(key: str) -> str:
    """Convert a response field name to its snake_case attribute name.

    >>> normalize_key("ip_corporateProxy")
    'ip_corporate_proxy'
    >>> normalize_key("maxmindID")
    'maxmind_id'
    """
    if _ALL_UPPER.match(key):
        return key.lower()
    key = _ACRONYM_BOUNDARY.sub(r"\1_\2", key)
    key = _CAMEL_BOUNDARY.sub(r"\1_\2", key)
    return key.lower()


def resolve_encoding(name: Optional[str]) -> str:
    """Return name when it is a text codec Python knows, otherwise the source encoding."""
    if not name:
        return SOURCE_ENCODING
    try:
        b"".decode(name)
    except LookupError:
        logger.warning("Unknown response charset %r, decoding as %s", name, SOURCE_ENCODING)
        return SOURCE_ENCODING
    return name


def transcode(value: RawBody, encoding: str = SOURCE_ENCODING) -> str:
    """Decode raw text into a str. Text that is already str passes through.

    Bytes that do not fit the given encoding are read as ISO-8859-1, which
    maps every byte, instead of being replaced.
    """
    if isinstance(value, str):
        return value
    try:
        return value.decode(resolve_encoding(encoding))
    except UnicodeDecodeError:
        logger.warning("Response value is not valid %s, decoding as %s", encoding, SOURCE_ENCODING)
        return value.decode(SOURCE_ENCODING)


def parse_integer(value: str) -> int:
    """Leading integer prefix of value; 0 when there is none."""
    match = _INTEGER_PREFIX.match(value)
    if match is None:
        return 0
    return int(match.group())


def parse_float(value: str) -> float:
    """Leading decimal prefix of value; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(value)
    if match is None:
        return 0.0
    return float(match.group())


def coerce_value(key: str, value: Optional[str]) -> AttributeValue:
    """Coerce a decoded text value according to the declared type of its normalized key."""
    if key in BOOLEAN_ATTRIBUTES:
        literal = value or ""
        if literal not in BOOLEAN_RESPONSES:
            raise DecodeError(key, literal)
        return BOOLEAN_RESPONSES[literal]
    if key in INTEGER_ATTRIBUTES:
        if value and not _INTEGER_PREFIX.match(value):
            logger.warning("Non-numeric value %r for integer field %s, using 0", value, key)
        return parse_integer(value or "")
    if key in FLOAT_ATTRIBUTES:
        if value and not _FLOAT_PREFIX.match(value):
            logger.warning("Non-numeric value %r for float field %s, using 0.0", value, key)
        return parse_float(value or "")
    if not value:
        return None
    return value


def split_records(body: RawBody) -> list[tuple[RawBody, Optional[RawBody]]]:
    """Split a body into (key, value) pairs on ';' then on the first '=' of each record.

    Empty records are dropped; a record without '=' has a value of None.
    """
    record_sep, pair_sep = (b";", b"=") if isinstance(body, bytes) else (";", "=")
    pairs = []
    for record in body.split(record_sep):
        if not record:
            continue
        key, sep, value = record.partition(pair_sep)
        pairs.append((key, value if sep else None))
    return pairs


def decode_body(body: RawBody, encoding: str = SOURCE_ENCODING) -> dict[str, AttributeValue]:
    """Parse a response body into normalized, typed attributes."""
    encoding = resolve_encoding(encoding)
    attributes: dict[str, AttributeValue] = {}
    for raw_key, raw_value in split_records(body):
        key = normalize_key(transcode(raw_key, encoding))
        value = transcode(raw_value, encoding) if raw_value is not None else None
        attributes[key] = coerce_value(key, value)
    return attributes


def decode(status_code: int, body: RawBody, encoding: str = SOURCE_ENCODING) -> DecodedResponse:
    """Decode a raw minFraud HTTP response.

    Raises:
        ConnectionError: the status is not a 2xx success; the body is not read.
        ServiceError: the body reports one of the known error codes.
        DecodeError: a boolean field holds an unrecognized literal.
    """
    if not 200 <= status_code < 300:
        raise ConnectionError(
            f"The minFraud service responded with http error {status_code}",
            status_code=status_code,
        )

    attributes = decode_body(body, encoding)

    err = attributes.get("err")
    if err in ERROR_CODES:
        raise ServiceError(err)
    if err in WARNING_CODES:
        logger.warning("minFraud returned warning %s", err)

    return DecodedResponse(status_code=status_code, attributes=attributes)
