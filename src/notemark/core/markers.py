"""Inline marker tokens: base64 payloads embedded in ``[[KIND:...]]`` envelopes."""

from __future__ import annotations

import base64
import binascii
import logging
import re

LOGGER = logging.getLogger(__name__)

# Any of the three envelopes, never spanning another "[["; inner grammar
# is checked separately
ENVELOPE_RE = re.compile(
    r"\[\[(?:CHECKLIST|IMAGE|FILE):(?:(?!\[\[).)*?\]\]", re.DOTALL
)
# [[CHECKLIST:<token>:<0|1>]], token may be empty
CHECKLIST_RE = re.compile(r"\[\[CHECKLIST:([A-Za-z0-9+/=]*):([01])\]\]")
# [[IMAGE:<token>]]
IMAGE_RE = re.compile(r"\[\[IMAGE:([A-Za-z0-9+/=]+)\]\]")
# [[FILE:<uri token>:<filename token>:<size>]]
FILE_RE = re.compile(r"\[\[FILE:([A-Za-z0-9+/=]+):([A-Za-z0-9+/=]+):([0-9]+)\]\]")


def encode(text: str) -> str:
    """Base64 (standard alphabet, no wrapping) of the UTF-8 bytes of *text*."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode(token: str) -> str:
    """Inverse of :func:`encode`; returns ``""`` for anything malformed."""
    try:
        return base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        # UnicodeDecodeError is a ValueError
        LOGGER.debug("notemark.codec.decode_fail len=%d %s", len(token), e)
        return ""


def checklist_marker(content: str, checked: bool) -> str:
    return f"[[CHECKLIST:{encode(content)}:{'1' if checked else '0'}]]"


def image_marker(uri: str) -> str:
    return f"[[IMAGE:{encode(uri)}]]"


def file_marker(uri: str, filename: str, size_bytes: int) -> str:
    return f"[[FILE:{encode(uri)}:{encode(filename)}:{size_bytes}]]"
