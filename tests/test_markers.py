"""Tests for marker token encoding."""

import logging

import pytest

from notemark.core.markers import checklist_marker, decode, encode, file_marker, image_marker


def test_encode_known_value():
    """Test encoding matches standard base64."""
    assert encode("buy milk") == "YnV5IG1pbGs="
    assert encode("") == ""


def test_encode_has_no_line_wrapping():
    """Test long input produces a single-line token."""
    token = encode("x" * 500)
    assert "\n" not in token
    assert set(token) <= set(
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="
    )


@pytest.mark.parametrize(
    "text",
    ["", "plain", "héllo wörld", "日本語のメモ", "emoji 🛒✅", "line\nbreak", "[[CHECKLIST::0]]"],
)
def test_decode_inverts_encode(text):
    """Test codec round-trip including multi-byte characters."""
    assert decode(encode(text)) == text


@pytest.mark.parametrize("token", ["not base64!", "YQ", "Y===", "a b c"])
def test_decode_malformed_returns_empty(token):
    """Test malformed tokens decode to an empty string."""
    assert decode(token) == ""


def test_decode_non_utf8_returns_empty():
    """Test valid base64 of invalid UTF-8 decodes to an empty string."""
    assert decode("/w==") == ""


def test_decode_failure_is_logged(caplog):
    """Test decode failures are logged at debug level."""
    with caplog.at_level(logging.DEBUG, logger="notemark.core.markers"):
        decode("YQ")
    assert "notemark.codec.decode_fail" in caplog.text


def test_marker_shapes():
    """Test marker builders."""
    assert checklist_marker("buy milk", False) == "[[CHECKLIST:YnV5IG1pbGs=:0]]"
    assert checklist_marker("", True) == "[[CHECKLIST::1]]"
    assert image_marker("a") == "[[IMAGE:YQ==]]"
    assert file_marker("a", "b", 12) == "[[FILE:YQ==:Yg==:12]]"
