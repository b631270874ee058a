"""URL token codec: JSON -> UTF-8 -> Base64 with a URL-safe alphabet.

Tokens use ``-`` and ``_`` in place of ``+`` and ``/`` and carry no ``=``
padding. Decoding also accepts the standard alphabet, padded or not, so
older links keep working.
"""

import base64
import binascii
import json
import logging
from typing import Any


logger = logging.getLogger(__name__)


def to_json(value: Any) -> str:
    """Serialize without whitespace, matching what browsers emit."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def encode_token(value: Any) -> str:
    raw = base64.b64encode(to_json(value).encode("utf-8")).decode("ascii")
    return raw.replace("+", "-").replace("/", "_").rstrip("=")


def decode_token(token: str) -> Any | None:
    """Inverse of ``encode_token``; None for anything that does not decode."""
    if not isinstance(token, str) or not token:
        return None

    normalized = token.strip().replace("-", "+").replace("_", "/").rstrip("=")
    if len(normalized) % 4 == 1:
        logger.warning("Rejecting build token with impossible length %d", len(normalized))
        return None
    normalized += "=" * (-len(normalized) % 4)

    try:
        data = base64.b64decode(normalized, validate=True)
        return json.loads(data.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as exc:
        logger.warning("Could not decode build token: %s", exc)
        return None
