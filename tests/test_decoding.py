"""Tests for minFraud response body decoding."""

import logging

import pytest
from minfraud_legacy.core.decoding import (
    decode,
    decode_body,
    normalize_key,
    parse_float,
    parse_integer,
    resolve_encoding,
    split_records,
    transcode,
)
from minfraud_legacy.exceptions import ConnectionError, DecodeError, ServiceError


class TestNormalizeKey:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("firstKey", "first_key"),
            ("second_keyName", "second_key_name"),
            ("ip_corporateProxy", "ip_corporate_proxy"),
            ("maxmindID", "maxmind_id"),
            ("ERR", "err"),
            ("err", "err"),
            ("countryMatch", "country_match"),
            ("custPhoneInBillingLoc", "cust_phone_in_billing_loc"),
            ("emailMD5", "email_md5"),
            ("HTTPHeaderValue", "http_header_value"),
            ("ip_asnum", "ip_asnum"),
        ],
    )
    def test_normalize(self, key, expected):
        assert normalize_key(key) == expected


class TestSplitRecords:
    def test_splits_on_first_equals_only(self):
        assert split_records("a=b=c;d=e") == [("a", "b=c"), ("d", "e")]

    def test_bytes_body(self):
        assert split_records(b"a=1;b=2") == [(b"a", b"1"), (b"b", b"2")]

    def test_skips_empty_records(self):
        assert split_records("a=1;;b=2;") == [("a", "1"), ("b", "2")]

    def test_record_without_equals(self):
        assert split_records("flag") == [("flag", None)]

    def test_empty_body(self):
        assert split_records(b"") == []


class TestNumericParsing:
    @pytest.mark.parametrize("raw, expected", [("17034", 17034), ("-3", -3), ("12abc", 12), ("abc", 0), ("", 0)])
    def test_parse_integer(self, raw, expected):
        assert parse_integer(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [("-27.0000", -27.0), ("0.5", 0.5), ("3", 3.0), ("1e2", 100.0), ("x", 0.0), ("", 0.0)],
    )
    def test_parse_float(self, raw, expected):
        assert parse_float(raw) == expected


class TestTranscode:
    def test_latin1_bytes(self):
        assert transcode("Zürich".encode("latin-1")) == "Zürich"

    def test_declared_encoding(self):
        assert transcode("Zürich".encode("utf-8"), "utf-8") == "Zürich"

    def test_str_passes_through(self):
        assert transcode("São Paulo") == "São Paulo"


def test_generic_keys_and_values():
    response = decode(200, b"firstKey=first value;second_keyName=second value")
    assert response.get("first_key") == "first value"
    assert response.get("second_key_name") == "second value"


def test_integer_and_float_coercion():
    response = decode(200, b"distance=17034;ip_latitude=-27.0000")
    assert response.get("distance") == 17034
    assert isinstance(response.get("distance"), int)
    assert response.get("ip_latitude") == -27.0
    assert isinstance(response.get("ip_latitude"), float)


def test_boolean_coercion():
    response = decode(200, b"countryMatch=Yes;highRiskCountry=No;binMatch=NotFound;binNameMatch=NA")
    assert response.get("country_match") is True
    assert response.get("high_risk_country") is False
    assert response.get("bin_match") is None
    assert response.get("bin_name_match") is None


def test_unknown_boolean_literal_raises():
    with pytest.raises(DecodeError) as exc_info:
        decode(200, b"countryMatch=Maybe")
    assert exc_info.value.field == "country_match"
    assert exc_info.value.value == "Maybe"


def test_embedded_equals_in_value():
    response = decode(200, b"maxmindID=ANK4C13A;ip_asnum=S44700 == Upstreams ======================")
    assert response.get("maxmind_id") == "ANK4C13A"
    assert response.get("ip_asnum") == "S44700 == Upstreams ======================"


def test_latin1_text_values_are_decoded():
    body = "ip_city=Montréal;ip_isp=Télé Québec".encode("latin-1")
    response = decode(200, body)
    assert response.get("ip_city") == "Montréal"
    assert response.get("ip_isp") == "Télé Québec"


def test_utf8_declared_encoding():
    response = decode(200, "ip_city=Köln".encode("utf-8"), "utf-8")
    assert response.get("ip_city") == "Köln"


def test_error_code_raises_service_error():
    with pytest.raises(ServiceError, match="INVALID_LICENSE_KEY") as exc_info:
        decode(200, b"err=INVALID_LICENSE_KEY")
    assert exc_info.value.code == "INVALID_LICENSE_KEY"


@pytest.mark.parametrize("code", ["IP_REQUIRED", "LICENSE_REQUIRED", "COUNTRY_REQUIRED", "MAX_REQUESTS_REACHED"])
def test_all_error_codes_raise(code):
    with pytest.raises(ServiceError):
        decode(200, f"err={code}".encode())


def test_warning_code_is_an_attribute(caplog):
    with caplog.at_level(logging.WARNING):
        response = decode(200, b"err=COUNTRY_NOT_FOUND;riskScore=0.1")
    assert response.get("err") == "COUNTRY_NOT_FOUND"
    assert response.warning == "COUNTRY_NOT_FOUND"
    assert response.risk_score == 0.1
    assert "COUNTRY_NOT_FOUND" in caplog.text


def test_unrecognized_err_is_plain_text():
    response = decode(200, b"err=SOMETHING_NEW")
    assert response.get("err") == "SOMETHING_NEW"
    assert response.warning is None


def test_unknown_name_and_decoded_null_both_return_none():
    response = decode(200, b"binMatch=NA")
    assert response.get("bin_match") is None
    assert response.get("no_such_field") is None
    assert "bin_match" in response
    assert "no_such_field" not in response


@pytest.mark.parametrize("status", [301, 404, 500, 503])
def test_non_success_status_raises_connection_error(status):
    with pytest.raises(ConnectionError) as exc_info:
        decode(status, b"err=INVALID_LICENSE_KEY")
    assert exc_info.value.status_code == status


def test_status_code_is_kept():
    assert decode(200, b"score=1").status_code == 200


def test_non_numeric_values_fall_back_to_zero(caplog):
    with caplog.at_level(logging.WARNING):
        attributes = decode_body(b"distance=far;proxyScore=high")
    assert attributes == {"distance": 0, "proxy_score": 0.0}
    assert "distance" in caplog.text


def test_empty_text_value_is_none():
    assert decode_body(b"ip_city=;ip_region") == {"ip_city": None, "ip_region": None}


@pytest.mark.parametrize(
    "name, expected",
    [(None, "ISO-8859-1"), ("", "ISO-8859-1"), ("utf-8", "utf-8"), ("x-bogus", "ISO-8859-1"), ("rot13", "ISO-8859-1")],
)
def test_resolve_encoding(name, expected):
    assert resolve_encoding(name) == expected


def test_unknown_declared_charset_falls_back_to_latin1(caplog):
    with caplog.at_level(logging.WARNING):
        response = decode(200, "ip_city=Zürich".encode("latin-1"), "x-bogus")
    assert response.get("ip_city") == "Zürich"
    assert "x-bogus" in caplog.text


def test_bytes_that_do_not_match_declared_charset_are_read_as_latin1():
    response = decode(200, "ip_city=Zürich".encode("latin-1"), "utf-8")
    assert response.get("ip_city") == "Zürich"
