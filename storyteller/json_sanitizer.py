"""JSON sanitization for tool-call argument payloads.

The model returns tool arguments as JSON text. Before that text is parsed it
is cleaned of null bytes, truncated unicode escapes and invisible characters,
and every string in the parsed result is normalized the same way.

Usage:
    from storyteller.json_sanitizer import parse_json_object

    arguments = parse_json_object('{"color": "skyblue"}')
    if arguments is None:
        ...  # payload was not a JSON object
"""

import json
import re
import unicodedata
from typing import Any, Dict, Optional


# Null bytes in any form: literal \x00 or JSON-escaped \u0000
_NULL_BYTE_PATTERN = re.compile(r"\x00")
# An escape only counts when preceded by an even run of backslashes.
_JSON_NULL_ESCAPE_PATTERN = re.compile(r"(?<!\\)((?:\\\\)*)\\u0000")

# \u followed by fewer than 4 hex digits
_MALFORMED_UNICODE_ESCAPE = re.compile(
    r"(?<!\\)((?:\\\\)*)\\u[0-9a-fA-F]{0,3}(?![0-9a-fA-F])"
)

# Zero-width and invisible Unicode characters
_INVISIBLE_CHARS = re.compile(
    r"[\u200b\u200c\u200d\u200e\u200f"  # zero-width spaces/joiners/marks
    r"\u202a-\u202e"  # bidi control
    r"\ufeff"  # BOM
    r"\ufffc"  # object replacement character
    r"\ufffe\uffff"  # noncharacters
    r"]"
)


def sanitize_text(text: str) -> str:
    """Sanitize a single text string.

    Removes null bytes, invisible characters and control characters other
    than tab and newlines, then normalizes to NFC. Idempotent.
    """
    if not text:
        return text

    text = _NULL_BYTE_PATTERN.sub("", text)
    text = _INVISIBLE_CHARS.sub("", text)
    text = "".join(
        ch for ch in text
        if ch in ("\t", "\n", "\r") or unicodedata.category(ch) != "Cc"
    )
    return unicodedata.normalize("NFC", text)


def sanitize_json_string(raw: str) -> str:
    """Sanitize raw JSON text before parsing.

    Operates on the text before ``json.loads`` and keeps the JSON structure
    intact.
    """
    if not raw:
        return raw

    raw = _JSON_NULL_ESCAPE_PATTERN.sub(r"\1", raw)
    raw = _NULL_BYTE_PATTERN.sub("", raw)
    raw = raw.replace("\ufffc", "")
    raw = _MALFORMED_UNICODE_ESCAPE.sub(r"\1", raw)
    return raw


def sanitize_parsed_response(data: Any) -> Any:
    """Deep-clean all string values in a parsed JSON structure."""
    if isinstance(data, str):
        return sanitize_text(data)
    elif isinstance(data, dict):
        return {k: sanitize_parsed_response(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [sanitize_parsed_response(item) for item in data]
    else:
        return data


def parse_json_object(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse a JSON object payload.

    An empty or missing payload is an empty object. Raw text is only
    sanitized when it fails to parse as is. Returns None when the text does
    not parse or is not a JSON object.
    """
    if raw is None:
        return {}
    if not isinstance(raw, str):
        return None
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        try:
            data = json.loads(sanitize_json_string(raw))
        except json.JSONDecodeError:
            return None
    if not isinstance(data, dict):
        return None
    return sanitize_parsed_response(data)

