from unittest.mock import MagicMock

import pytest
from minfraud_legacy import Configuration, reset_configuration
from minfraud_legacy.core.models import RawResponse


@pytest.fixture(autouse=True)
def clean_configuration(monkeypatch):
    """Each test starts without a process-wide configuration or MINFRAUD_* env vars."""
    for var in ("MINFRAUD_LICENSE_KEY", "MINFRAUD_REQUESTED_TYPE", "MINFRAUD_VERIFY_TLS"):
        monkeypatch.delenv(var, raising=False)
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def config() -> Configuration:
    return Configuration(license_key="6")


@pytest.fixture
def base_attributes() -> dict:
    return {"ip": "127.0.0.1", "transaction_id": "Order-1-1"}


@pytest.fixture
def fake_transport():
    """Transport double answering with a fixed risk score."""
    transport = MagicMock()
    transport.send.return_value = RawResponse(
        status_code=200,
        body=b"riskScore=3.4;score=1.25;countryMatch=Yes;queriesRemaining=12",
    )
    return transport
