"""A single fraud-scoring transaction.

Validates its attributes at construction, sends itself to minFraud on the
first score lookup and keeps the decoded response for the rest of its life.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from types import TracebackType
from typing import Any, Mapping, Optional

from .config import Configuration, get_configuration, resolve_endpoint
from .core import decoding, encoding, validation
from .core.clients.minfraud import HttpTransport, Transport
from .core.models import DecodedResponse, TransactionAttributes

logger = logging.getLogger(__name__)


class TransactionState(str, Enum):
    UNSENT = "unsent"
    SENT = "sent"


class Transaction:
    """Validated transaction attributes plus the cached minFraud response.

    Usage::

        txn = Transaction(ip="81.2.69.160", transaction_id="Order-1", email="a@example.com")
        txn.score()

    The first ``score()`` call does the network exchange; later calls return
    the cached value. A failed exchange is not retried: build a new
    Transaction to try again.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        transport: Optional[Transport] = None,
        **attributes: Any,
    ):
        self.attributes: TransactionAttributes = validation.validate(attributes)
        self._config = config
        self._transport = transport
        self._response: Optional[DecodedResponse] = None
        self._error: Optional[Exception] = None
        self._error_traceback: Optional[TracebackType] = None
        self._state = TransactionState.UNSENT
        self._lock = threading.Lock()

    @classmethod
    def build(
        cls,
        attributes: Mapping[str, Any],
        config: Optional[Configuration] = None,
        transport: Optional[Transport] = None,
    ) -> Transaction:
        return cls(config=config, transport=transport, **attributes)

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def response(self) -> Optional[DecodedResponse]:
        """The decoded response, or None until score() has succeeded."""
        return self._response

    def score(self) -> Optional[float]:
        """Risk score for this transaction, fetched once and cached."""
        return self._send().risk_score

    risk_score = score

    def _send(self) -> DecodedResponse:
        with self._lock:
            if self._state is TransactionState.SENT:
                if self._error is not None:
                    # restore the first failure's traceback so repeated calls do not grow it
                    raise self._error.with_traceback(self._error_traceback)
                return self._response

            self._state = TransactionState.SENT
            try:
                self._response = self._exchange()
            except Exception as exc:
                self._error = exc
                self._error_traceback = exc.__traceback__
                raise
            return self._response

    def _exchange(self) -> DecodedResponse:
        config = self._config or get_configuration()
        params = encoding.encode(self.attributes, config)
        endpoint = resolve_endpoint(self.attributes.service_region)
        transport = self._transport or HttpTransport(verify=config.verify_tls)

        raw = transport.send(endpoint, params, timeout=self.attributes.timeout)
        response = decoding.decode(raw.status_code, raw.body, raw.encoding)
        logger.debug(
            "minFraud transaction %s scored %s",
            self.attributes.transaction_id,
            response.risk_score,
        )
        return response
